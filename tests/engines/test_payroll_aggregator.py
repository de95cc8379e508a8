"""
Tests for the Payroll Aggregator.

Covers:
- Gross / full gross / net formulas
- Living allowance excluded from gross
- Only employee insurance reduces net
- Totals and grouped totals
"""

from decimal import Decimal

import pytest

from hr_engines.payroll import PayrollAggregator, PayrollTotals, SalaryComponents


@pytest.fixture
def components():
    return SalaryComponents(
        basic_salary=Decimal("8500"),
        transport_allowance=Decimal("800"),
        incentives=Decimal("1000"),
        living_allowance=Decimal("200"),
        station_allowance=Decimal("500"),
        mobile_allowance=Decimal("150"),
        employee_insurance=Decimal("400"),
        employer_social_insurance=Decimal("900"),
        health_insurance=Decimal("120"),
        income_tax=Decimal("650"),
    )


class TestFormulas:

    def setup_method(self):
        self.aggregator = PayrollAggregator()

    def test_gross_excludes_living_allowance(self, components):
        assert self.aggregator.gross(components) == Decimal("10950")

    def test_full_gross_includes_living_allowance(self, components):
        assert self.aggregator.full_gross(components) == Decimal("11150")

    def test_net_subtracts_employee_insurance_only(self, components):
        assert self.aggregator.net(components) == Decimal("10750")

    def test_all_zero_components(self):
        empty = SalaryComponents()
        assert self.aggregator.gross(empty) == Decimal("0")
        assert self.aggregator.full_gross(empty) == Decimal("0")
        assert self.aggregator.net(empty) == Decimal("0")

    def test_breakdown_matches_formulas(self, components):
        b = self.aggregator.breakdown(components)
        assert b.gross == self.aggregator.gross(components)
        assert b.full_gross == self.aggregator.full_gross(components)
        assert b.net == self.aggregator.net(components)
        assert b.income_tax == Decimal("650")

    def test_tax_and_employer_contributions_do_not_reduce_net(self, components):
        heavier = SalaryComponents(**{
            **components.as_dict(),
            "income_tax": Decimal("5000"),
            "employer_social_insurance": Decimal("5000"),
            "health_insurance": Decimal("5000"),
        })
        assert self.aggregator.net(heavier) == self.aggregator.net(components)

    def test_field_names_are_stable(self):
        assert SalaryComponents.field_names()[0] == "basic_salary"
        assert len(SalaryComponents.field_names()) == 10


class TestSummaries:

    def setup_method(self):
        self.aggregator = PayrollAggregator()

    def test_summarize_sums_each_record(self, components):
        other = SalaryComponents(basic_salary=Decimal("5000"), employee_insurance=Decimal("250"))
        totals = self.aggregator.summarize([components, other])
        assert totals.headcount == 2
        assert totals.gross == Decimal("15950")
        assert totals.full_gross == Decimal("16150")
        assert totals.net == Decimal("15500")
        assert totals.living_allowance == Decimal("200")
        assert totals.total_insurance == Decimal("400") + Decimal("250") + Decimal("900") + Decimal("120")

    def test_summarize_empty(self):
        assert self.aggregator.summarize([]) == PayrollTotals()

    def test_summarize_by_keeps_first_seen_order(self, components):
        small = SalaryComponents(basic_salary=Decimal("1000"))
        groups = self.aggregator.summarize_by([
            ("Cairo", components),
            ("Alexandria", small),
            ("Cairo", small),
        ])
        assert list(groups) == ["Cairo", "Alexandria"]
        assert groups["Cairo"].headcount == 2
        assert groups["Cairo"].gross == Decimal("11950")
        assert groups["Alexandria"].net == Decimal("1000")
