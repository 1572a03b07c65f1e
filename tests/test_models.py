"""
Tests for Bill Tracker

Test strategy:
1. Unit tests for individual components (models, rounding, validators)
2. Ledger tests against in-memory and temporary-file stores
3. No test writes outside tmp_path
"""

import pytest
from datetime import date, datetime, timezone
from decimal import Decimal

from pydantic import ValidationError as PydanticValidationError

from bill_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from bill_tracker.models.bill import (
    BillDraft,
    BillRecord,
    MonthTotals,
    parse_due_date,
)
from bill_tracker.models.money import add_rounded, round2, sum_rounded, to_decimal


PAID_AT = datetime(2024, 3, 2, 9, 30, tzinfo=timezone.utc)
CREATED_AT = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_record(**overrides) -> BillRecord:
    fields = {
        "id": "b_abc1234",
        "name": "Energia",
        "value": "150.00",
        "due_date": "2024-03-10",
        "created_at": CREATED_AT,
    }
    fields.update(overrides)
    return BillRecord(**fields)


class TestRounding:
    """Tests for round2 and accumulation."""

    @pytest.mark.parametrize("value,expected", [
        ("19.999", "20.00"),
        ("0.001", "0.00"),
        ("0.005", "0.01"),
        (1.005, "1.01"),
        ("1.005", "1.01"),
        (2.675, "2.68"),
        (10, "10.00"),
        (Decimal("3.14159"), "3.14"),
        ("-3.5", "-3.50"),
    ])
    def test_round2(self, value, expected):
        assert round2(value) == Decimal(expected)

    @pytest.mark.parametrize("value,expected", [
        ("10.075", "10.07"),
        ("4.015", "4.01"),
        (10.075, "10.07"),
        (Decimal("4.015"), "4.01"),
    ])
    def test_round2_follows_binary_value(self, value, expected):
        """10.075 is 10.07499999... as a float and rounds down."""
        assert round2(value) == Decimal(expected)

    def test_round2_is_idempotent_on_cents(self):
        for cents in ("10.07", "0.29", "1234.56", "0.01"):
            assert round2(round2(cents)) == Decimal(cents)

    def test_round2_rejects_garbage(self):
        with pytest.raises(ValueError):
            round2("abc")
        with pytest.raises(ValueError):
            round2(float("nan"))
        with pytest.raises(ValueError):
            round2("1e400")
        with pytest.raises(TypeError):
            round2(True)

    def test_to_decimal_strips_whitespace(self):
        assert to_decimal(" 12.5 ") == Decimal("12.5")

    def test_incremental_matches_pairwise(self):
        """round2(round2(a) + round2(b)) is one accumulation step."""
        a, b = 19.999, 0.001
        assert add_rounded(a, b) == round2(round2(a) + round2(b)) == Decimal("20.00")

    def test_sum_rounded(self):
        assert sum_rounded([0.1, 0.2, 0.3]) == Decimal("0.60")
        assert sum_rounded([]) == Decimal("0.00")


class TestBillRecord:
    """Tests for the BillRecord model."""

    def test_defaults(self):
        record = make_record()
        assert record.paid is False
        assert record.paid_at is None
        assert record.value == Decimal("150.00")

    def test_value_rounded_on_construction(self):
        assert make_record(value=19.999).value == Decimal("20.00")

    def test_negative_value_rejected(self):
        with pytest.raises(PydanticValidationError):
            make_record(value="-1")

    def test_name_stripped_and_required(self):
        assert make_record(name="  Água ").name == "Água"
        with pytest.raises(PydanticValidationError):
            make_record(name="   ")

    def test_due_date_accepts_date(self):
        record = make_record(due_date=date(2024, 3, 15))
        assert record.due_date == "2024-03-15"
        assert record.due_on == date(2024, 3, 15)

    def test_unparseable_due_date_kept(self):
        """Bad stored dates survive; they just have no due_on."""
        record = make_record(due_date="15/03/2024")
        assert record.due_date == "15/03/2024"
        assert record.due_on is None

    def test_paid_requires_paid_at(self):
        with pytest.raises(PydanticValidationError, match="Paid bill must have paid_at"):
            make_record(paid=True)

    def test_unpaid_cannot_have_paid_at(self):
        with pytest.raises(PydanticValidationError, match="Unpaid bill cannot have paid_at"):
            make_record(paid_at=PAID_AT)

    def test_to_storage_dict_uses_camel_case(self):
        record = make_record(value="150.5", paid=True, paid_at=PAID_AT)
        data = record.to_storage_dict()
        assert set(data) == {"id", "name", "value", "dueDate", "paid", "paidAt", "createdAt"}
        assert data["value"] == 150.5
        assert data["dueDate"] == "2024-03-10"
        assert data["paidAt"].startswith("2024-03-02T09:30:00")

    def test_validate_from_stored_dict(self):
        """Stored camelCase JSON loads, including millisecond "Z" timestamps."""
        record = BillRecord.model_validate({
            "id": "b_x1y2z3a",
            "name": "Internet",
            "value": 99.9,
            "dueDate": "2024-03-01",
            "paid": True,
            "paidAt": "2024-03-02T10:00:00.000Z",
            "createdAt": "2024-02-28T08:00:00.000Z",
        })
        assert record.value == Decimal("99.90")
        assert record.paid_at == datetime(2024, 3, 2, 10, 0, tzinfo=timezone.utc)

    def test_storage_round_trip(self):
        record = make_record(paid=True, paid_at=PAID_AT)
        assert BillRecord.model_validate(record.to_storage_dict()) == record


class TestParseDueDate:
    def test_valid(self):
        assert parse_due_date("2024-02-29") == date(2024, 2, 29)

    @pytest.mark.parametrize("value", [None, "", "2023-02-29", "ontem", "2024-13-01"])
    def test_invalid(self, value):
        assert parse_due_date(value) is None


class TestBillDraftAndTotals:
    """Tests for BillDraft and MonthTotals."""

    def test_draft_rounds_value(self):
        draft = BillDraft(name=" Luz ", value="10.006", due_date="2024-03-01")
        assert draft.name == "Luz"
        assert draft.value == Decimal("10.01")
        assert draft.due_date == date(2024, 3, 1)

    def test_month_totals_defaults(self):
        totals = MonthTotals(year=2024, month=3)
        assert totals.total_all == Decimal("0.00")
        assert totals.bill_count == 0

    def test_month_totals_month_bounds(self):
        with pytest.raises(PydanticValidationError):
            MonthTotals(year=2024, month=13)


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        event = AuditEvent(
            event_type=AuditEventType.BILL_ADDED,
            description="Bill added",
        )
        assert event.severity == AuditSeverity.INFO
        assert event.timestamp.tzinfo is not None

    def test_audit_event_to_log_dict(self):
        event = AuditEventBuilder.bill_added(
            bill_id="b_abc1234",
            name="Energia",
            value=Decimal("150.00"),
            due_date="2024-03-10",
        )
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "bill_added"
        assert log_dict["entity_id"] == "b_abc1234"
        assert log_dict["details"] == {
            "name": "Energia",
            "value": "150.00",
            "due_date": "2024-03-10",
        }

    def test_payment_toggled(self):
        event = AuditEventBuilder.payment_toggled("b_abc1234", paid=False)
        assert event.event_type == AuditEventType.PAYMENT_STATUS_UPDATED
        assert event.description == "Bill marked as pending"

    def test_storage_read_failed_is_error(self):
        event = AuditEventBuilder.storage_read_failed("minhas_contas_v1", "bad json")
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "bad json"

    def test_record_skipped_is_warning(self):
        event = AuditEventBuilder.record_skipped(3, "invalid", bill_id="b_1")
        assert event.severity == AuditSeverity.WARNING
        assert event.details == {"position": 3}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
