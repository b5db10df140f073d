"""
Utility modules for Aggregator Cleaner
"""
from .logger import setup_logger
from .time_utils import format_age, parse_max_age, utc_now
from .validators import is_valid_uuid

__all__ = [
    "setup_logger",
    "format_age",
    "parse_max_age",
    "utc_now",
    "is_valid_uuid",
]
