"""Firestore integration over the REST API (google-auth + httpx)."""

from app.infrastructure.firebase._rest_client import (
    DocumentExistsError,
    DocumentNotFoundError,
    DocumentSnapshot,
    FirestoreRESTClient,
    WriteBatch,
)
from app.infrastructure.firebase._rest_encoding import SERVER_TIMESTAMP, Increment
from app.infrastructure.firebase.client import (
    close_firebase,
    get_firestore_client,
    get_service_account_info,
    init_firebase,
)

__all__ = [
    "SERVER_TIMESTAMP",
    "DocumentExistsError",
    "DocumentNotFoundError",
    "DocumentSnapshot",
    "FirestoreRESTClient",
    "Increment",
    "WriteBatch",
    "close_firebase",
    "get_firestore_client",
    "get_service_account_info",
    "init_firebase",
]
