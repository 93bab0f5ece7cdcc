"""
worktime - compute the time left for work once calendar events are cut out.
"""

__version__ = "0.1.0"
