"""
Notification sink for LectureDeck

Sessions report structured results; this module turns them into the short
title/description messages a front end shows as toasts.
"""
from pydantic import BaseModel, Field
from typing import List, Optional, Protocol
from datetime import datetime
from enum import Enum
from threading import Lock

from lecturedeck.models.session import FlashcardSummary, QuizResult, SessionKind
from lecturedeck.utils.logger import get_logger

logger = get_logger(__name__)


class NotificationVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class Notification(BaseModel):
    """Human-readable message for the user"""
    title: str
    description: str
    variant: NotificationVariant = Field(default=NotificationVariant.DEFAULT)
    created_at: datetime = Field(default_factory=datetime.now)


class NotificationSink(Protocol):
    def notify(self, notification: Notification) -> None:
        ...


def quiz_completed(result: QuizResult) -> Notification:
    return Notification(
        title="Quiz Completed!",
        description=f"Your score: {result.score:.1f}%",
    )


def flashcards_completed(summary: FlashcardSummary) -> Notification:
    title = "Review Complete!" if summary.kind == SessionKind.REVIEW else "All Cards Completed!"
    description = f"You got {summary.correct} out of {summary.attempted} cards correct"
    if summary.remaining_to_review:
        description += f" ({summary.remaining_to_review} cards to review)"
    return Notification(title=title, description=description)


def success(description: str) -> Notification:
    return Notification(title="Success", description=description)


def error(description: str) -> Notification:
    return Notification(title="Error", description=description, variant=NotificationVariant.DESTRUCTIVE)


class LoggingNotificationSink:
    """Writes notifications to the log"""

    def notify(self, notification: Notification) -> None:
        if notification.variant == NotificationVariant.DESTRUCTIVE:
            logger.error(f"{notification.title}: {notification.description}")
        else:
            logger.info(f"{notification.title}: {notification.description}")


class MemoryNotificationSink:
    """Keeps notifications until a client collects them"""

    def __init__(self, forward: Optional[NotificationSink] = None):
        self._pending: List[Notification] = []
        self._lock = Lock()
        self.forward = forward

    def notify(self, notification: Notification) -> None:
        with self._lock:
            self._pending.append(notification)
        if self.forward is not None:
            self.forward.notify(notification)

    def drain(self) -> List[Notification]:
        """Return and clear pending notifications"""
        with self._lock:
            pending, self._pending = self._pending, []
        return pending

    def __len__(self) -> int:
        with self._lock:
            return len(self._pending)
