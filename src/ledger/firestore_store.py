import logging

from google.api_core import exceptions as google_exceptions
from google.cloud import firestore

from src.errors import StoreFailure, WriteConflict
from src.ledger.store import LedgerStore
from src.models.ledger import LedgerRecord

logger = logging.getLogger(__name__)


class FirestoreLedgerStore(LedgerStore):
    """Ledger records as Firestore documents, one per user id.

    The document's update_time is the version: creation uses create()
    (fails if the document appeared meanwhile) and mutation uses update()
    with a last_update_time precondition.
    """

    def __init__(
        self,
        client: firestore.Client | None = None,
        collection: str = "users",
        max_write_attempts: int = 10,
    ):
        super().__init__(max_write_attempts)
        self._client = client if client is not None else firestore.Client()
        self._collection = collection

    def _document(self, user_id: str):
        return self._client.collection(self._collection).document(user_id)

    def _read(self, user_id: str):
        try:
            snapshot = self._document(user_id).get()
        except google_exceptions.GoogleAPIError as exc:
            raise StoreFailure(f"reading ledger {user_id} failed: {exc}") from exc
        if not snapshot.exists:
            return None, None
        return LedgerRecord.from_document(snapshot.to_dict() or {}), snapshot.update_time

    def _write(self, user_id: str, record: LedgerRecord, expected_version) -> None:
        data = record.to_document()
        data["updatedAt"] = firestore.SERVER_TIMESTAMP
        document = self._document(user_id)
        try:
            if expected_version is None:
                document.create(data)
            else:
                option = self._client.write_option(last_update_time=expected_version)
                document.update(data, option=option)
        except (google_exceptions.Conflict, google_exceptions.FailedPrecondition) as exc:
            raise WriteConflict(f"ledger {user_id} changed concurrently") from exc
        except google_exceptions.GoogleAPIError as exc:
            raise StoreFailure(f"writing ledger {user_id} failed: {exc}") from exc

    def set(self, user_id: str, record: LedgerRecord) -> None:
        data = record.to_document()
        data["updatedAt"] = firestore.SERVER_TIMESTAMP
        try:
            self._document(user_id).set(data)
        except google_exceptions.GoogleAPIError as exc:
            raise StoreFailure(f"writing ledger {user_id} failed: {exc}") from exc
