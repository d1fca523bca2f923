# file: services/dispatcher.py

import logging
from typing import Any, Callable, Dict, Mapping, Protocol, Union

from pydantic import ValidationError

from app.models.notification import (
    DispatchOutcome,
    MulticastResult,
    NUMBER_CALLED,
    PushMessage,
    PushNotification,
    QueuedNotification,
)
from app.services.firebase_client import server_timestamp

logger = logging.getLogger(__name__)


class Messenger(Protocol):
    def send_multicast(self, message: PushMessage) -> MulticastResult: ...


class RecordRef(Protocol):
    def update(self, fields: Dict[str, Any]) -> None: ...


def build_number_called_message(record: QueuedNotification, game_id: str) -> PushMessage:
    return PushMessage(
        notification=PushNotification(
            title="New Bingo Number Called!",
            body=f"Number {record.number} has been called",
        ),
        data={"type": NUMBER_CALLED, "number": record.number, "gameId": game_id},
        tokens=list(record.fcm_tokens),
    )


def dispatch(
        record: Union[QueuedNotification, Mapping[str, Any], None],
        game_id: str,
        messenger: Messenger,
        record_ref: RecordRef,
        clock: Callable[[], Any] = server_timestamp,
) -> DispatchOutcome:
    """
    Turns one queued notification into at most one multicast push.

    Records that are missing, already sent, of another type or without tokens
    are skipped and left untouched. Per-token failures are only logged; the
    record is marked sent once the multicast call returns. If the call itself
    raises, the record stays unsent and the error propagates.

    Raw document data is validated here; a document that does not parse
    counts as invalid.
    """
    if record is None:
        logger.info(f"No data associated with the event (game {game_id})")
        return DispatchOutcome.MISSING

    if not isinstance(record, QueuedNotification):
        try:
            record = QueuedNotification.model_validate(record)
        except ValidationError as e:
            logger.info(f"Invalid notification data for game {game_id}: {e}")
            return DispatchOutcome.INVALID

    if record.sent:
        return DispatchOutcome.ALREADY_SENT

    if record.type != NUMBER_CALLED or not record.fcm_tokens:
        logger.info(f"Invalid notification data for game {game_id} "
                    f"(type={record.type!r}, tokens={len(record.fcm_tokens)})")
        return DispatchOutcome.INVALID

    message = build_number_called_message(record, game_id)

    try:
        result = messenger.send_multicast(message)
    except Exception as e:
        logger.error(f"Error sending notifications for game {game_id}: {e}")
        raise

    logger.info(f"Successfully sent {result.success_count} notifications")
    logger.info(f"Failed to send {result.failure_count} notifications")

    record_ref.update({"sent": True, "sentAt": clock()})
    return DispatchOutcome.SENT
