"""
Tests for the Uniform Service.

Covers:
- Issuance with derived total price
- Active view excludes fully depreciated items
- Corrective edits and deletes
- Valuation and the uniform report
- Rollback on store failure
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from hr_kernel.domain.clock import DeterministicClock
from hr_kernel.exceptions import (
    InvalidQuantityError,
    InvalidRecordError,
    NegativeAmountError,
    UniformNotFoundError,
)
from hr_modules.uniforms import UniformService


@pytest.fixture
def clock():
    return DeterministicClock(date(2024, 4, 15))


@pytest.fixture
def service(session, clock):
    return UniformService(session, clock=clock)


def _issue(service, employee_id="Emp001", item_type="Navy Pants", quantity=2,
           unit_price="350", delivery_date=date(2024, 1, 15), **kwargs):
    return service.issue_uniform(
        employee_id=employee_id,
        item_type=item_type,
        quantity=quantity,
        unit_price=Decimal(unit_price),
        delivery_date=delivery_date,
        **kwargs,
    )


class TestIssue:

    def test_total_price_defaults_to_quantity_times_unit(self, service):
        item = _issue(service)
        assert item.total_price == Decimal("700")

    def test_explicit_total_price_kept(self, service):
        item = _issue(service, total_price=Decimal("650"))
        assert item.total_price == Decimal("650")

    def test_issued_item_is_stored(self, service, test_actor_id):
        item = _issue(service, actor_id=test_actor_id, notes="size L")
        stored = service.get_uniform(item.id)
        assert stored.employee_id == "Emp001"
        assert stored.total_price == Decimal("700")
        assert stored.delivery_date == date(2024, 1, 15)
        assert stored.notes == "size L"

    def test_negative_price_rejected(self, service):
        with pytest.raises(NegativeAmountError):
            _issue(service, unit_price="-1")
        assert service.list_uniforms() == []

    def test_zero_quantity_rejected(self, service):
        with pytest.raises(InvalidQuantityError):
            _issue(service, quantity=0)

    def test_blank_employee_rejected(self, service):
        with pytest.raises(InvalidRecordError):
            _issue(service, employee_id="  ")

    def test_issue_logs_commit(self, service, captured_logs):
        item = _issue(service)
        messages = [r["message"] for r in captured_logs()]
        assert "uniform_issue_started" in messages
        assert "uniform_issue_committed" in messages
        committed = [r for r in captured_logs() if r["message"] == "uniform_issue_committed"]
        assert committed[0]["item_id"] == str(item.id)


class TestActiveView:

    def test_active_item_valued_at_75_percent(self, service):
        _issue(service)
        valued = service.valuate_uniforms("Emp001")
        assert len(valued) == 1
        item, valuation = valued[0]
        assert valuation.tier_percent == 75
        assert valuation.current_value == Decimal("525")

    def test_expired_item_hidden_but_kept(self, service):
        old = _issue(service, delivery_date=date(2023, 1, 1), unit_price="100", quantity=1)
        fresh = _issue(service)
        active = service.get_employee_uniforms("Emp001")
        assert [i.id for i in active] == [fresh.id]
        assert {i.id for i in service.list_uniforms("Emp001")} == {old.id, fresh.id}

    def test_view_moves_with_clock(self, service, clock):
        _issue(service)
        clock.set_time(date(2025, 1, 15))
        assert service.get_employee_uniforms("Emp001") == []

    def test_other_employees_excluded(self, service):
        _issue(service, employee_id="Emp002")
        assert service.get_employee_uniforms("Emp001") == []


class TestCorrections:

    def test_update_changes_fields(self, service):
        item = _issue(service)
        updated = service.update_uniform(item.id, quantity=3, total_price=Decimal("1050"))
        assert updated.quantity == 3
        stored = service.get_uniform(item.id)
        assert stored.quantity == 3
        assert stored.total_price == Decimal("1050")

    def test_update_revalidates(self, service):
        item = _issue(service)
        with pytest.raises(NegativeAmountError):
            service.update_uniform(item.id, unit_price=Decimal("-5"))
        assert service.get_uniform(item.id).unit_price == Decimal("350")

    def test_update_logs_commit(self, service, captured_logs):
        item = _issue(service)
        service.update_uniform(item.id, quantity=3)
        messages = [r["message"] for r in captured_logs()]
        assert messages.index("uniform_update_started") < messages.index(
            "uniform_update_committed"
        )
        assert "uniform_update_rolled_back" not in messages

    def test_update_store_failure_rolls_back(
        self, service, session, monkeypatch, captured_logs
    ):
        item = _issue(service)

        def fail_commit():
            raise RuntimeError("disk full")

        monkeypatch.setattr(session, "commit", fail_commit)
        with pytest.raises(RuntimeError, match="disk full"):
            service.update_uniform(item.id, quantity=5)
        monkeypatch.undo()

        assert service.get_uniform(item.id).quantity == 2
        rolled_back = [r for r in captured_logs() if r["message"] == "uniform_update_rolled_back"]
        assert [r["item_id"] for r in rolled_back] == [str(item.id)]
        assert "uniform_update_committed" not in [r["message"] for r in captured_logs()]

    def test_update_unknown_field(self, service):
        item = _issue(service)
        with pytest.raises(TypeError):
            service.update_uniform(item.id, colour="blue")

    def test_update_unknown_item(self, service):
        with pytest.raises(UniformNotFoundError) as exc_info:
            service.update_uniform(uuid4(), quantity=1)
        assert exc_info.value.code == "UNIFORM_NOT_FOUND"

    def test_delete(self, service):
        item = _issue(service)
        assert service.delete_uniform(item.id) is True
        assert service.delete_uniform(item.id) is False
        with pytest.raises(UniformNotFoundError):
            service.get_uniform(item.id)


class TestReport:

    def test_report_totals(self, service):
        _issue(service)  # 700 at 75%
        _issue(service, employee_id="Emp002", item_type="Shirt", quantity=1,
               unit_price="200", delivery_date=date(2023, 1, 1))  # expired
        _issue(service, employee_id="Emp002", item_type="Navy Pants", quantity=1,
               unit_price="100", delivery_date=date(2024, 4, 1))  # 100%

        report = service.build_report()
        assert report.as_of == date(2024, 4, 15)
        assert report.item_count == 3
        assert report.total_quantity == 4
        assert report.total_original == Decimal("1000")
        assert report.total_current == Decimal("625")
        assert report.total_depreciation == Decimal("375")
        assert report.employee_count == 2
        assert report.tier_distribution == {100: 1, 75: 1, 0: 1}

    def test_report_breakdowns(self, service):
        _issue(service)
        _issue(service, employee_id="Emp002", quantity=1, unit_price="100",
               delivery_date=date(2024, 4, 1))

        report = service.build_report()
        by_employee = {s.employee_id: s for s in report.by_employee}
        assert by_employee["Emp001"].current_value == Decimal("525")
        assert by_employee["Emp001"].depreciation == Decimal("175")
        by_type = {s.item_type: s for s in report.by_type}
        assert by_type["Navy Pants"].quantity == 3
        assert by_type["Navy Pants"].original_value == Decimal("800")

    def test_empty_report(self, service):
        report = service.build_report()
        assert report.item_count == 0
        assert report.total_current == Decimal("0")
        assert report.tier_distribution == {}


class TestRollback:

    def test_store_failure_rolls_back(self, service, session, monkeypatch):
        def fail_commit():
            raise RuntimeError("disk full")

        monkeypatch.setattr(session, "commit", fail_commit)
        with pytest.raises(RuntimeError, match="disk full"):
            _issue(service)
        monkeypatch.undo()
        assert service.list_uniforms() == []

    def test_delete_failure_keeps_item(self, service, session, monkeypatch, captured_logs):
        item = _issue(service)

        def fail_commit():
            raise RuntimeError("disk full")

        monkeypatch.setattr(session, "commit", fail_commit)
        with pytest.raises(RuntimeError):
            service.delete_uniform(item.id)
        monkeypatch.undo()

        assert service.get_uniform(item.id).id == item.id
        assert any(r["message"] == "uniform_delete_rolled_back" for r in captured_logs())
