"""Email notification adapter."""

from .console import ConsoleEmailNotifier, RecordingEmailNotifier, SentEmail

__all__ = ["ConsoleEmailNotifier", "RecordingEmailNotifier", "SentEmail"]
