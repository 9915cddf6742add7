"""Notification port and adapters.

Uses the recording adapter in tests and the logging adapter in development;
real delivery channels plug in by implementing NotificationService.
"""

from notifications.channel.fake_notifier import RecordingNotifier
from notifications.channel.log_notifier import LoggingNotifier
from notifications.channel.port import NotificationService

__all__ = ["LoggingNotifier", "NotificationService", "RecordingNotifier"]
