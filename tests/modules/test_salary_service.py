"""
Tests for the Salary Record Service.

Covers:
- Upsert on (employee_id, year): last write wins, no merge
- Derived gross / full gross / net on read
- Latest record lookup
- Yearly and per-station summaries
- Boundary validation of components
- Exact Decimal storage and store-error propagation
"""

from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from hr_engines.payroll import SalaryComponents
from hr_kernel.exceptions import InvalidRecordError, NegativeAmountError
from hr_modules.salary import SalaryRecord, SalaryRecordService


@pytest.fixture
def service(session):
    return SalaryRecordService(session)


def _record(employee_id="Emp001", year=2026, station="Cairo", **amounts):
    defaults = {
        "basic_salary": "8500",
        "transport_allowance": "800",
        "incentives": "1000",
        "living_allowance": "200",
        "station_allowance": "500",
        "mobile_allowance": "150",
        "employee_insurance": "400",
    }
    defaults.update(amounts)
    return SalaryRecord.from_fields(employee_id, year, station_location=station, **defaults)


class TestUpsert:

    def test_create_then_read(self, service, test_actor_id):
        service.save_record(_record(), actor_id=test_actor_id)
        stored = service.get_record("Emp001", 2026)
        assert stored.components.basic_salary == Decimal("8500")
        assert stored.station_location == "Cairo"

    def test_second_save_replaces_whole_record(self, service):
        service.save_record(_record())
        service.save_record(_record(basic_salary="9000", incentives="0", station=""))
        records = service.list_records(2026)
        assert len(records) == 1
        assert records[0].components.basic_salary == Decimal("9000")
        assert records[0].components.incentives == Decimal("0")
        assert records[0].station_location == ""

    def test_missing_components_reset_to_zero(self, service):
        service.save_record(_record(income_tax="650"))
        service.save_record(SalaryRecord.from_fields("Emp001", 2026, basic_salary="1000"))
        stored = service.get_record("Emp001", 2026)
        assert stored.components.income_tax == Decimal("0")
        assert stored.components.transport_allowance == Decimal("0")

    def test_different_years_are_separate(self, service):
        service.save_record(_record(year=2025))
        service.save_record(_record(year=2026))
        assert len(service.list_records()) == 2

    def test_save_logs_action(self, service, captured_logs):
        service.save_record(_record())
        service.save_record(_record())
        committed = [r for r in captured_logs() if r["message"] == "salary_record_save_committed"]
        assert [r["action"] for r in committed] == ["created", "replaced"]
        assert committed[0]["employee_id"] == "Emp001"

    def test_delete(self, service):
        service.save_record(_record())
        assert service.delete_record("Emp001", 2026)
        assert service.get_record("Emp001", 2026) is None
        assert not service.delete_record("Emp001", 2026)


class TestStorage:

    def test_high_precision_amount_round_trips(self, service, session):
        amount = Decimal("12345678901.123456789")
        service.save_record(SalaryRecord.from_fields("E1", 2025, basic_salary=amount))
        session.expire_all()
        stored = service.get_record("E1", 2025)
        assert stored.components.basic_salary == amount
        assert isinstance(stored.components.basic_salary, Decimal)

    def test_concurrent_insert_conflict_propagates(
        self, service, session, monkeypatch, captured_logs
    ):
        service.save_record(_record())
        # Another writer inserted the row after this service looked it up.
        monkeypatch.setattr(service, "_find", lambda employee_id, year: None)

        with pytest.raises(IntegrityError):
            service.save_record(_record(basic_salary="9000"))

        monkeypatch.undo()
        assert not session.in_transaction()
        assert not session.new
        assert service.get_record("Emp001", 2026).components.basic_salary == Decimal("8500")
        rolled_back = [
            r for r in captured_logs() if r["message"] == "salary_record_save_rolled_back"
        ]
        assert len(rolled_back) == 1
        assert rolled_back[0]["year"] == 2026
        assert rolled_back[0]["employee_id"] == "Emp001"


class TestDerivedTotals:

    def test_breakdown(self, service):
        service.save_record(_record())
        b = service.breakdown("Emp001", 2026)
        assert b.gross == Decimal("10950")
        assert b.full_gross == Decimal("11150")
        assert b.net == Decimal("10750")

    def test_breakdown_missing_record(self, service):
        assert service.breakdown("Nobody", 2026) is None

    def test_latest_record(self, service):
        service.save_record(_record(year=2024))
        service.save_record(_record(year=2026, basic_salary="9999"))
        service.save_record(_record(year=2025))
        latest = service.get_latest_record("Emp001")
        assert latest.year == 2026
        assert latest.components.basic_salary == Decimal("9999")

    def test_latest_record_none(self, service):
        assert service.get_latest_record("Emp404") is None

    def test_summaries(self, service):
        service.save_record(_record("Emp001"))
        service.save_record(_record("Emp002", station="Alexandria", basic_salary="5000"))
        service.save_record(_record("Emp003", year=2025))

        totals = service.summarize(2026)
        assert totals.headcount == 2
        assert totals.gross == Decimal("10950") + Decimal("7450")

        stations = service.summarize_by_station(2026)
        assert set(stations) == {"Cairo", "Alexandria"}
        assert stations["Alexandria"].net == Decimal("7250")


class TestValidation:

    def test_negative_component_rejected(self):
        with pytest.raises(NegativeAmountError):
            _record(incentives="-1")

    def test_unknown_component_rejected(self):
        with pytest.raises(InvalidRecordError):
            SalaryRecord.from_fields("Emp001", 2026, bonus="10")

    def test_float_component_rejected(self):
        with pytest.raises(InvalidRecordError):
            SalaryRecord.from_fields("Emp001", 2026, basic_salary=10.5)

    @pytest.mark.parametrize("year", [0, -1, "2026", True])
    def test_bad_year_rejected(self, year):
        with pytest.raises(InvalidRecordError):
            SalaryRecord("Emp001", year, SalaryComponents())

    def test_components_type_required(self):
        with pytest.raises(InvalidRecordError):
            SalaryRecord("Emp001", 2026, {"basic_salary": Decimal("1")})

    def test_key(self):
        assert _record().key == ("Emp001", 2026)
