# file: controllers/notification.py

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from app.config import get_settings
from app.models.notification import DispatchResponse
from app.services.dispatcher import dispatch
from app.services.firebase_client import (
    FcmMessenger,
    FirestoreRecordRef,
    get_firestore_client,
    queue_document,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_firebase_app(request: Request):
    return request.app.state.firebase_app


def get_db(firebase_app=Depends(get_firebase_app)):
    return get_firestore_client(firebase_app)


def get_messenger(firebase_app=Depends(get_firebase_app)) -> FcmMessenger:
    return FcmMessenger(firebase_app, dry_run=get_settings().fcm_dry_run)


@router.post("/games/{game_id}/notification-queue/{notification_id}/dispatch", response_model=DispatchResponse)
def dispatch_queued_notification(
        game_id: str,
        notification_id: str,
        db=Depends(get_db),
        messenger: FcmMessenger = Depends(get_messenger),
):
    """
    Dispatches one newly created queue record. Called once per document
    creation; a 500 response tells the caller to retry with the same record.
    """
    doc_ref = queue_document(db, game_id, notification_id)
    snapshot = doc_ref.get()
    record = snapshot.to_dict() if snapshot.exists else None

    try:
        outcome = dispatch(record, game_id, messenger, FirestoreRecordRef(doc_ref))
    except Exception as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail=f"Error sending notifications: {e}")

    return DispatchResponse(outcome=outcome, gameId=game_id, notificationId=notification_id)
