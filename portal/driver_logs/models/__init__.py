"""
Driver logs models package.

In-memory models for a driver's daily log and its duty status entries.
The HOS backend owns persistence; these classes carry the editing rules.
"""

from .daily_log import DailyLog, LogState
from .duty_status_entry import DutyStatus, DutyStatusEntry

__all__ = ['DailyLog', 'DutyStatus', 'DutyStatusEntry', 'LogState']
