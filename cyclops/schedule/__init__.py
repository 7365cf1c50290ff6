# Re-export schedule components
from .core import ScheduleResult
from .scheduler import DayRangeScheduler

__all__ = ["ScheduleResult", "DayRangeScheduler"]
