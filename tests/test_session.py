"""Tests for myexpense.session."""

import pytest
from conftest import MemoryMedium

from myexpense.domain.models import TransactionType
from myexpense.domain.transactions import Transaction, fields_to_dict
from myexpense.errors import RecordNotFound, ValidationError
from myexpense.session import EditController, Editing, Idle
from myexpense.store.records import RecordStore

FORM = {"type": "Expense", "date": "2024-02-14", "category": "Food", "description": "Cake", "amount": "150"}


def controller_for(medium: MemoryMedium, answer: bool = True) -> tuple[EditController, list[Transaction]]:
    asked: list[Transaction] = []

    def confirm(txn: Transaction) -> bool:
        asked.append(txn)
        return answer

    store = RecordStore(medium)
    store.load()
    return EditController(store, confirm_delete=confirm), asked


class TestSubmit:
    """Tests for EditController.submit."""

    def test_idle_submit_creates(self, memory_medium: MemoryMedium) -> None:
        """Should create a record when not editing."""
        controller, _ = controller_for(memory_medium)
        txn = controller.submit(FORM)

        assert txn.amount == 150
        assert txn in controller.store.records
        assert controller.state == Idle()

    def test_invalid_form_changes_nothing(self, memory_medium: MemoryMedium) -> None:
        """Should raise ValidationError without touching the store."""
        controller, _ = controller_for(memory_medium)
        before = controller.store.records

        with pytest.raises(ValidationError) as exc:
            controller.submit({**FORM, "amount": "twelve"})

        assert exc.value.field == "amount"
        assert controller.store.records == before
        assert "insert" not in memory_medium.calls

    def test_invalid_form_keeps_editing(self, memory_medium: MemoryMedium) -> None:
        """Should stay in the edit session after a validation failure."""
        controller, _ = controller_for(memory_medium)
        controller.begin_edit("b")

        with pytest.raises(ValidationError):
            controller.submit({**FORM, "date": ""})
        assert controller.state == Editing("b")


class TestEditing:
    """Tests for begin_edit, cancel and submit while editing."""

    def test_begin_edit_returns_current_values(self, memory_medium: MemoryMedium) -> None:
        """Should expose the record's values for pre-filling."""
        controller, _ = controller_for(memory_medium)
        fields = controller.begin_edit("a")

        assert fields.type == TransactionType.INCOME
        assert fields.category == "Salary"
        assert controller.is_editing
        assert controller.editing_id == "a"

    def test_begin_edit_unknown_id(self, memory_medium: MemoryMedium) -> None:
        """Should raise RecordNotFound and stay idle."""
        controller, _ = controller_for(memory_medium)
        with pytest.raises(RecordNotFound):
            controller.begin_edit("nope")
        assert controller.state == Idle()

    def test_submit_updates_and_returns_to_idle(self, memory_medium: MemoryMedium) -> None:
        """Should update the edited record in place."""
        controller, _ = controller_for(memory_medium)
        count = len(controller.store.records)
        controller.begin_edit("b")
        txn = controller.submit(FORM)

        assert txn.id == "b"
        assert controller.store.get("b").description == "Cake"
        assert len(controller.store.records) == count
        assert controller.state == Idle()

    def test_cancel_leaves_store_alone(self, memory_medium: MemoryMedium) -> None:
        """Should return to idle without writing."""
        controller, _ = controller_for(memory_medium)
        controller.begin_edit("b")
        controller.cancel()

        assert controller.state == Idle()
        assert memory_medium.calls == ["read"]

    def test_vanished_record_refreshes(self, memory_medium: MemoryMedium) -> None:
        """Should refresh and go idle when the edited record was deleted elsewhere."""
        controller, _ = controller_for(memory_medium)
        controller.begin_edit("b")
        memory_medium.stored = [r for r in memory_medium.stored or [] if r["id"] != "b"]

        with pytest.raises(RecordNotFound):
            controller.submit(FORM)

        assert controller.state == Idle()
        assert [t.id for t in controller.store.records] == ["a", "c"]


class TestDelete:
    """Tests for EditController.delete."""

    def test_confirmed_delete(self, memory_medium: MemoryMedium) -> None:
        """Should ask first, then delete."""
        controller, asked = controller_for(memory_medium, answer=True)

        assert controller.delete("c") is True
        assert [t.id for t in asked] == ["c"]
        assert "c" not in {t.id for t in controller.store.records}

    def test_declined_delete(self, memory_medium: MemoryMedium) -> None:
        """Should leave the store alone when the user declines."""
        controller, _ = controller_for(memory_medium, answer=False)

        assert controller.delete("c") is False
        assert "remove" not in memory_medium.calls
        assert len(controller.store.records) == 3

    def test_deleting_edited_record_ends_session(self, memory_medium: MemoryMedium) -> None:
        """Should return to idle when the edited record is deleted."""
        controller, _ = controller_for(memory_medium)
        controller.begin_edit("a")
        controller.delete("a")
        assert controller.state == Idle()

    def test_unknown_id(self, memory_medium: MemoryMedium) -> None:
        """Should raise RecordNotFound without asking."""
        controller, asked = controller_for(memory_medium)
        with pytest.raises(RecordNotFound):
            controller.delete("nope")
        assert asked == []


def test_submit_accepts_prefilled_values(memory_medium: MemoryMedium) -> None:
    """Submitting the pre-filled values unchanged should keep the record as it was."""
    controller, _ = controller_for(memory_medium)
    original = controller.store.get("a")
    txn = controller.submit(fields_to_dict(controller.begin_edit("a")))

    assert txn == original
