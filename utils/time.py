"""
Time utility functions
"""
import time


def get_current_time():
    """Monotonic clock reading in seconds (bomb fuses, tick pacing)"""
    return time.monotonic()


def sleep(seconds):
    """Sleep for specified seconds"""
    time.sleep(seconds)
