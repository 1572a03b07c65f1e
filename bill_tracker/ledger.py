"""
Bill Ledger

The ledger owns the authoritative list of bills and defines every
operation the presentation layer may perform on it:
1. add / edit / toggle_paid / remove (each one saves the whole ledger)
2. filter_by_month / totals_for_month (read-only)
3. load / save against a key-value storage slot

DESIGN DECISION: Persist on every mutation.
The whole ledger is serialized into one slot after each change. There is
no incremental write and no write batching; for a personal list of bills
the simplicity is worth more than the saved writes.

Editing mode belongs to the caller. submit() takes the id being edited
as a parameter; the ledger keeps no "currently editing" state.

Stored entries that do not validate are never dropped. They are kept
verbatim, left out of every view, and written back after the readable
bills on each save.

All operations are synchronous. Mutations and saves hold a re-entrant
lock, so one ledger may be shared between threads (a Streamlit server
runs each session in its own thread).
"""

import json
import secrets
import string
import threading
from datetime import datetime
from typing import Any, Callable, Iterator, Optional

from pydantic import ValidationError as PydanticValidationError

from bill_tracker.audit import AuditLogger, configure_logging
from bill_tracker.config import LedgerSettings, get_settings
from bill_tracker.errors import NotFoundError
from bill_tracker.models.bill import BillRecord, MonthTotals, utc_now
from bill_tracker.queries import MonthView, compute_month_totals
from bill_tracker.services.storage import (
    JsonFileStore,
    KeyValueStore,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from bill_tracker.validation import BillValidator


DEFAULT_STORAGE_KEY = "minhas_contas_v1"

ID_PREFIX = "b_"
ID_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 7


class Ledger:
    """
    In-memory bill ledger mirrored to a storage slot.

    Records are kept in an insertion-ordered dict keyed by id, newest
    first, so lookups by id are O(1) and display order is preserved.
    """

    def __init__(
        self,
        store: KeyValueStore,
        storage_key: str = DEFAULT_STORAGE_KEY,
        validator: Optional[BillValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._store = store
        self._storage_key = storage_key
        self._validator = validator or BillValidator()
        self._audit_logger = audit_logger or AuditLogger()
        self._clock = clock or utc_now

        self._records: dict[str, BillRecord] = {}
        # Stored entries that failed validation, written back untouched
        self._unreadable: list[Any] = []
        # Every id this ledger has handed out or loaded, deleted ones included
        self._issued_ids: set[str] = set()
        self._lock = threading.RLock()

    @property
    def storage_key(self) -> str:
        return self._storage_key

    @property
    def unreadable_count(self) -> int:
        """Stored entries kept as-is because they could not be read."""
        return len(self._unreadable)

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def _parse_snapshot(self, raw: str) -> list:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageReadError(f"Stored bills are not valid JSON: {e}")
        if not isinstance(data, list):
            raise StorageReadError(
                f"Stored bills must be a JSON array, found {type(data).__name__}"
            )
        return data

    def load(self) -> list[BillRecord]:
        """
        Replace the in-memory ledger with the stored snapshot.

        Never raises. A missing, unreadable or malformed slot gives an
        empty ledger. Individual entries that fail validation, or repeat
        an id already loaded, are kept aside unchanged and saved back
        after the readable bills. Each bill is rebuilt from its stored
        dict, so nothing returned here shares state with the store.

        Returns:
            The loaded bills, newest first
        """
        with self._lock:
            records: dict[str, BillRecord] = {}
            unreadable: list[Any] = []

            try:
                raw = self._store.get(self._storage_key)
                items = self._parse_snapshot(raw) if raw else []
            except StorageError as e:
                self._audit_logger.log_storage_read_failed(self._storage_key, str(e))
                items = []

            for position, item in enumerate(items):
                bill_id = item.get("id") if isinstance(item, dict) else None
                if isinstance(bill_id, str):
                    self._issued_ids.add(bill_id)
                try:
                    record = BillRecord.model_validate(item)
                except PydanticValidationError as e:
                    self._audit_logger.log_record_skipped(position, str(e), bill_id)
                    unreadable.append(item)
                    continue

                if record.id in records:
                    self._audit_logger.log_record_skipped(
                        position, "Duplicate bill id", record.id
                    )
                    unreadable.append(item)
                    continue
                records[record.id] = record

            self._records = records
            self._unreadable = unreadable
            self._audit_logger.log_ledger_loaded(self._storage_key, len(records))
            return self.records()

    def save(self) -> None:
        """
        Overwrite the storage slot with the whole ledger.

        Entries that could not be read on load are written after the
        readable bills, exactly as they were stored.

        Raises:
            StorageWriteError: If the store rejects the write. The
                in-memory ledger keeps the change either way.
        """
        with self._lock:
            payload = json.dumps(
                [record.to_storage_dict() for record in self._records.values()]
                + self._unreadable,
                ensure_ascii=False,
            )
            try:
                self._store.set(self._storage_key, payload)
            except StorageWriteError as e:
                self._audit_logger.log_save_failed(self._storage_key, str(e))
                raise

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def _new_id(self) -> str:
        """Short random base-36 id, never one this ledger has seen before."""
        while True:
            suffix = "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))
            candidate = ID_PREFIX + suffix
            if candidate not in self._issued_ids:
                self._issued_ids.add(candidate)
                return candidate

    def _require(self, bill_id: str) -> BillRecord:
        try:
            return self._records[bill_id]
        except KeyError:
            raise NotFoundError(bill_id)

    def add(self, name: Any, value: Any, due_date: Any) -> BillRecord:
        """
        Add a new unpaid bill at the top of the ledger.

        Raises:
            ValidationError: Nothing is created or saved
            StorageWriteError: The bill was added in memory but not saved
        """
        draft = self._validator.validate(name, value, due_date)

        with self._lock:
            record = BillRecord(
                id=self._new_id(),
                name=draft.name,
                value=draft.value,
                due_date=draft.due_date,
                paid=False,
                paid_at=None,
                created_at=self._clock(),
            )
            self._records = {record.id: record, **self._records}
            self.save()

        self._audit_logger.log_bill_added(
            bill_id=record.id,
            name=record.name,
            value=record.value,
            due_date=record.due_date,
        )
        return record

    def edit(self, bill_id: str, name: Any, value: Any, due_date: Any) -> BillRecord:
        """
        Change a bill's name, value and due date.

        Paid status, paid_at and created_at are left alone.

        Raises:
            ValidationError: Nothing is changed or saved
            NotFoundError: No bill with this id
        """
        draft = self._validator.validate(name, value, due_date)

        with self._lock:
            record = self._require(bill_id)

            new_fields = {
                "name": draft.name,
                "value": draft.value,
                "due_date": draft.due_date.isoformat(),
            }
            changes = {
                field: [str(getattr(record, field)), str(new)]
                for field, new in new_fields.items()
                if getattr(record, field) != new
            }

            record.name = new_fields["name"]
            record.value = new_fields["value"]
            record.due_date = new_fields["due_date"]
            self.save()

        self._audit_logger.log_bill_edited(bill_id=record.id, changes=changes)
        return record

    def toggle_paid(self, bill_id: str) -> BillRecord:
        """
        Flip a bill between paid and pending.

        Raises:
            NotFoundError: No bill with this id
        """
        with self._lock:
            record = self._require(bill_id)

            paid = not record.paid
            record.paid = paid
            record.paid_at = self._clock() if paid else None
            self.save()

        self._audit_logger.log_payment_toggled(bill_id=record.id, paid=paid)
        return record

    def remove(self, bill_id: str) -> bool:
        """
        Delete a bill. The caller must have asked the user to confirm.

        Removing an unknown id is not an error. The ledger is saved
        either way.

        Returns:
            True if a bill was removed
        """
        with self._lock:
            record = self._records.pop(bill_id, None)
            self.save()

        if record is not None:
            self._audit_logger.log_bill_deleted(bill_id=record.id, name=record.name)
        return record is not None

    def submit(
        self,
        name: Any,
        value: Any,
        due_date: Any,
        editing_id: Optional[str] = None,
    ) -> BillRecord:
        """Form submit: edit the bill being edited, or add a new one."""
        if editing_id:
            return self.edit(editing_id, name, value, due_date)
        return self.add(name, value, due_date)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get(self, bill_id: str) -> BillRecord:
        """
        Raises:
            NotFoundError: No bill with this id
        """
        with self._lock:
            return self._require(bill_id)

    def records(self) -> list[BillRecord]:
        """All bills, newest first."""
        with self._lock:
            return list(self._records.values())

    def filter_by_month(self, year: int, month: int) -> MonthView:
        """
        Bills due in the given month, earliest first.

        The view is lazy: it reflects the ledger as it is when iterated.

        Raises:
            ValidationError: If year or month is out of range
        """
        return MonthView(self.records, year, month)

    def totals_for_month(self, year: int, month: int) -> MonthTotals:
        """All / paid / pending totals for the bills due in a month."""
        return compute_month_totals(self.filter_by_month(year, month))

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, bill_id: object) -> bool:
        with self._lock:
            return bill_id in self._records

    def __iter__(self) -> Iterator[BillRecord]:
        return iter(self.records())


def create_ledger(
    settings: Optional[LedgerSettings] = None,
    store: Optional[KeyValueStore] = None,
) -> Ledger:
    """
    Factory function to create a loaded ledger.

    Args:
        settings: Defaults to get_settings()
        store: Defaults to a JsonFileStore at settings.storage_path

    Returns:
        A Ledger with the stored bills already loaded
    """
    settings = settings or get_settings()
    configure_logging(settings.effective_log_level)

    ledger = Ledger(
        store=store if store is not None else JsonFileStore(settings.storage_path),
        storage_key=settings.storage_key,
    )
    ledger.load()
    return ledger
