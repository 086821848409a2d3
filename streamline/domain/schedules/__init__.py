"""Schedules domain - host briefings and admin schedule management"""
