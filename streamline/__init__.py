"""Streamline - livestream scheduling and host briefing API"""

__version__ = "1.0.0"
