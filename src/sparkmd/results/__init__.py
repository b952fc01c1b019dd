"""Write-back of results, statuses and error reports."""

from sparkmd.results.document import Document
from sparkmd.results.error_writer import ErrorWriter
from sparkmd.results.notifications import Notification, NotificationLog
from sparkmd.results.result_writer import ResultWriter

__all__ = ["Document", "ErrorWriter", "Notification", "NotificationLog", "ResultWriter"]
