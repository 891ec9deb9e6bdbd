"""
Driver Logs Services Package.

Services:
- LogBookService: Create, save, delete and submit daily logs on the backend
- DailyLogEditor: Single-view editing session with driver-facing messages
"""

from .log_book import LogBookService
from .log_editor import DailyLogEditor

__all__ = [
    'LogBookService',
    'DailyLogEditor',
]
