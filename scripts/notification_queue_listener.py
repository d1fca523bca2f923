# file: scripts/notification_queue_listener.py

import logging
import os
import sys
import time

# Add the project root to the Python path to allow absolute imports from the 'app' package
# when this file is run as a standalone script.
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from app.config import get_settings
from app.models.notification import DispatchOutcome, QUEUE_COLLECTION, parse_queue_path
from app.services.dispatcher import dispatch
from app.services.firebase_client import FcmMessenger, FirestoreRecordRef, get_firestore_client, init_firebase

logger = logging.getLogger("notification_queue_listener")


def handle_changes(changes, messenger) -> int:
    """
    Dispatches every newly added queue document in a snapshot batch.
    Returns how many pushes were sent. A failed send is logged and the
    document stays unsent so the next listener start picks it up again.
    """
    sent = 0
    for change in changes:
        if change.type.name != "ADDED":
            continue

        document = change.document
        try:
            game_id, notification_id = parse_queue_path(document.reference.path)
        except ValueError as e:
            logger.warning(f"Skipping document outside a game queue: {e}")
            continue

        try:
            outcome = dispatch(document.to_dict(), game_id, messenger, FirestoreRecordRef(document.reference))
        except Exception as e:
            logger.error(f"Dispatch failed for {game_id}/{notification_id}: {e}")
            continue

        logger.debug(f"{game_id}/{notification_id}: {outcome.value}")
        if outcome is DispatchOutcome.SENT:
            sent += 1
    return sent


def main():
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    firebase_app = init_firebase(settings)
    db = get_firestore_client(firebase_app)
    messenger = FcmMessenger(firebase_app, dry_run=settings.fcm_dry_run)

    def on_snapshot(col_snapshot, changes, read_time):
        handle_changes(changes, messenger)

    watch = db.collection_group(QUEUE_COLLECTION).on_snapshot(on_snapshot)
    logger.info("Listening for new documents in '%s'...", QUEUE_COLLECTION)
    try:
        while True:
            time.sleep(60)
    except KeyboardInterrupt:
        logger.info("Stopping listener.")
    finally:
        watch.unsubscribe()


if __name__ == "__main__":
    main()
