"""Domain packages: auth, schedules, master_data, notifications"""
