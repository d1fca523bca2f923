import logging
from typing import Any, Dict, Optional

import firebase_admin
from firebase_admin import credentials, firestore, messaging

from app.config import Settings
from app.models.notification import MulticastResult, PushMessage, QUEUE_COLLECTION

logger = logging.getLogger(__name__)


def init_firebase(settings: Settings) -> firebase_admin.App:
    """
    Initializes the default Firebase Admin app once per process and returns it.
    Later calls return the app that is already registered.
    """
    if firebase_admin._apps:
        return firebase_admin.get_app()

    cred = None
    if settings.firebase_credentials:
        cred = credentials.Certificate(settings.firebase_credentials)
    options = {"projectId": settings.firebase_project_id} if settings.firebase_project_id else None

    app = firebase_admin.initialize_app(cred, options)
    logger.info("Firebase Admin SDK initialized (project=%s).", app.project_id)
    return app


class FcmMessenger:
    """Sends PushMessages through Firebase Cloud Messaging."""

    def __init__(self, app: Optional[firebase_admin.App] = None, dry_run: bool = False):
        self.app = app
        self.dry_run = dry_run

    @staticmethod
    def to_multicast(message: PushMessage) -> messaging.MulticastMessage:
        # FCM data payloads only carry string values
        data = {key: str(value) for key, value in message.data.items()}
        return messaging.MulticastMessage(
            tokens=list(message.tokens),
            notification=messaging.Notification(
                title=message.notification.title,
                body=message.notification.body,
            ),
            data=data,
        )

    def send_multicast(self, message: PushMessage) -> MulticastResult:
        response = messaging.send_each_for_multicast(
            self.to_multicast(message), dry_run=self.dry_run, app=self.app
        )
        return MulticastResult(success_count=response.success_count, failure_count=response.failure_count)


class FirestoreRecordRef:
    """Write handle for one queue document."""

    def __init__(self, document_reference):
        self.document_reference = document_reference

    def update(self, fields: Dict[str, Any]) -> None:
        self.document_reference.update(fields)


def get_firestore_client(app: Optional[firebase_admin.App] = None):
    return firestore.client(app)


def queue_document(db, game_id: str, notification_id: str):
    return db.collection("games").document(game_id).collection(QUEUE_COLLECTION).document(notification_id)


def server_timestamp():
    return firestore.SERVER_TIMESTAMP
