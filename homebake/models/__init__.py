"""Application models package."""

from homebake.models.activity_log import ActivityLog
from homebake.models.batch import ArchivedBatch, Batch
from homebake.models.bread_type import BreadType
from homebake.models.sales import RemainingBread, SalesLog
from homebake.models.shift_report import ShiftFeedback, ShiftReport
from homebake.models.user import Invite, User

__all__ = [
    "User", "Invite", "BreadType", "Batch", "ArchivedBatch", "SalesLog", "RemainingBread",
    "ShiftReport", "ShiftFeedback", "ActivityLog",
]
