# file: models/notification.py

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

NUMBER_CALLED = "numberCalled"
QUEUE_COLLECTION = "notificationQueue"


class QueuedNotification(BaseModel):
    """A record in games/{gameId}/notificationQueue, as written by the game-state writer."""
    type: Optional[str] = None
    number: Any = None
    fcm_tokens: List[str] = Field(default_factory=list, alias="fcmTokens")
    sent: bool = False
    sent_at: Any = Field(default=None, alias="sentAt")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator('fcm_tokens', mode='before')
    def default_tokens(cls, v):
        return [] if v is None else v

    @field_validator('sent', mode='before')
    def default_sent(cls, v):
        return False if v is None else v


class PushNotification(BaseModel):
    title: str
    body: str


class PushMessage(BaseModel):
    notification: PushNotification
    data: Dict[str, Any]
    tokens: List[str]


class MulticastResult(BaseModel):
    success_count: int
    failure_count: int


class DispatchOutcome(str, Enum):
    MISSING = "missing"
    ALREADY_SENT = "already_sent"
    INVALID = "invalid"
    SENT = "sent"


class DispatchResponse(BaseModel):
    outcome: DispatchOutcome
    gameId: str
    notificationId: str


def parse_queue_path(path: str) -> Tuple[str, str]:
    """Splits 'games/{gameId}/notificationQueue/{notificationId}' into (gameId, notificationId)."""
    parts = path.strip("/").split("/")
    if len(parts) != 4 or parts[0] != "games" or parts[2] != QUEUE_COLLECTION or not parts[1] or not parts[3]:
        raise ValueError(f"Not a notification queue document path: {path!r}")
    return parts[1], parts[3]
