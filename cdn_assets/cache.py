"""
Cache-buster time bucketing for CDN asset URLs
"""
import math
import re

MINUTE_IN_SECONDS = 60

# Rolling window the cache buster is chunked into
CACHE_WINDOW = 2 * MINUTE_IN_SECONDS

# 2010-01-01 00:00:00 UTC
TIMESTAMP_FLOOR = 1262304000

# Loose numeric strings: "123", " 1.7e9", "+42", ".5"
_NUMERIC_RE = re.compile(r'^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$', re.ASCII)


def to_number(value):
    """Return value as a float, or None if it isn't numeric"""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str) and _NUMERIC_RE.match(value):
        return float(value)
    return None


def is_timestamp(value, now):
    """
    Whether value looks like a Unix timestamp.

    Only values between 2010 and `now` count, so future timestamps and
    short numeric hashes are rejected.
    """
    number = to_number(value)
    if number is None:
        return False
    return TIMESTAMP_FLOOR <= number <= now


def bucket_version(version, window=CACHE_WINDOW):
    """Round a timestamp down to the start of its window"""
    return int(math.floor(to_number(version) / window) * window)
