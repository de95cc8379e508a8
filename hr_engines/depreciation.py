"""
Module: hr_engines.depreciation
Responsibility:
    Map the time elapsed since a benefit was issued to a discrete
    residual-value tier.  Two schedules ship with the engine: uniform
    items (12-month horizon, quarterly 25% steps) and training-cost debts
    (36-month horizon, all-or-nothing).

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Reads "now" only through an injected ``Clock`` when the caller does
    not pass a reference date.

Invariants enforced:
    - ``current_value == original_value * tier_percent / 100`` and lies in
      ``[0, original_value]``.
    - Tier is monotonically non-increasing as the reference date advances.
    - Threshold comparison is ``>=``: exactly 3 months elapsed is already
      in the 3-month step.
    - Issuance in the future resolves to 100%.
    - No rounding: summed totals equal the sum of individual values.
    - Derived values are never persisted; expiry is a view-time filter.

Failure modes:
    - InvalidScheduleError when a schedule is constructed with unordered
      thresholds, out-of-range percents, or no 0% horizon step.
    - Malformed dates are a caller contract violation; nothing here
      validates them.

Usage:
    from datetime import date
    from hr_engines.depreciation import BenefitDepreciationEngine, UNIFORM_SCHEDULE

    engine = BenefitDepreciationEngine(clock=clock)
    engine.tier_percent(date(2024, 1, 15), date(2024, 4, 15))  # 75
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from hr_kernel.domain.clock import Clock, SystemClock
from hr_kernel.exceptions import InvalidScheduleError
from hr_kernel.logging_config import get_logger
from hr_engines.dates import MonthCounting, as_date, months_between
from hr_engines.tracer import traced_engine

logger = get_logger("engines.depreciation")

FULL_VALUE_PERCENT = 100
_HUNDRED = Decimal("100")


@dataclass(frozen=True)
class TierStep:
    """Once ``threshold_months`` have elapsed, ``percent_remaining`` is retained."""

    threshold_months: int
    percent_remaining: int


@dataclass(frozen=True)
class DepreciationSchedule:
    """
    Step function from elapsed whole months to percent of value retained.

    Contract:
        ``steps`` are ordered by descending threshold.  The first step is
        the horizon and retains 0%.  Elapsed months below every threshold
        retain 100%.
    Guarantees:
        - Thresholds are positive and strictly descending.
        - Percents lie in 0..100 and never increase with elapsed time.
    """

    name: str
    steps: tuple[TierStep, ...]

    def __post_init__(self) -> None:
        if not self.steps:
            raise InvalidScheduleError(self.name, "at least one step is required")
        if self.steps[0].percent_remaining != 0:
            raise InvalidScheduleError(self.name, "horizon step must retain 0%")

        previous: TierStep | None = None
        for step in self.steps:
            if step.threshold_months <= 0:
                raise InvalidScheduleError(
                    self.name,
                    f"threshold must be positive, got {step.threshold_months}",
                )
            if not 0 <= step.percent_remaining <= FULL_VALUE_PERCENT:
                raise InvalidScheduleError(
                    self.name,
                    f"percent must be within 0..100, got {step.percent_remaining}",
                )
            if previous is not None:
                if step.threshold_months >= previous.threshold_months:
                    raise InvalidScheduleError(
                        self.name, "thresholds must be strictly descending"
                    )
                if step.percent_remaining < previous.percent_remaining:
                    raise InvalidScheduleError(
                        self.name, "retained percent cannot grow with elapsed time"
                    )
            previous = step

    @classmethod
    def from_pairs(
        cls, name: str, pairs: Iterable[tuple[int, int]]
    ) -> DepreciationSchedule:
        """Build a schedule from ``(threshold_months, percent_remaining)`` pairs."""
        return cls(
            name=name,
            steps=tuple(TierStep(int(m), int(p)) for m, p in pairs),
        )

    @property
    def horizon_months(self) -> int:
        """Months after which the benefit is fully consumed."""
        return self.steps[0].threshold_months

    @property
    def possible_percents(self) -> tuple[int, ...]:
        """Every tier this schedule can yield, highest first."""
        percents = [FULL_VALUE_PERCENT]
        for step in reversed(self.steps):
            if step.percent_remaining not in percents:
                percents.append(step.percent_remaining)
        return tuple(percents)

    def percent_for(self, months_elapsed: int) -> int:
        """Tier for a given number of elapsed months."""
        for step in self.steps:
            if months_elapsed >= step.threshold_months:
                return step.percent_remaining
        return FULL_VALUE_PERCENT


UNIFORM_SCHEDULE = DepreciationSchedule.from_pairs(
    "uniform", ((12, 0), (9, 25), (6, 50), (3, 75))
)

TRAINING_DEBT_SCHEDULE = DepreciationSchedule.from_pairs(
    "training_debt", ((36, 0),)
)


@dataclass(frozen=True)
class BenefitItem:
    """
    A monetary entitlement or liability that decays with time.

    Contract:
        ``issued_on`` and ``original_value`` are fixed at issuance.
        Derived figures live on ``BenefitValuation`` and are recomputed on
        every query.
    """

    issued_on: date
    original_value: Decimal
    owner_id: str
    reference: str | None = None


@dataclass(frozen=True)
class BenefitValuation:
    """
    Result of valuing one benefit item at a reference date.

    Guarantees:
        - ``current_value + depreciation == item.original_value``.
        - ``is_expired`` iff ``tier_percent == 0``.
    """

    item: BenefitItem
    as_of: date
    months_elapsed: int
    tier_percent: int
    current_value: Decimal
    depreciation: Decimal
    is_expired: bool


class BenefitDepreciationEngine:
    """
    Stateless tier calculator over an injected clock.

    Contract:
        Every operation accepts an explicit reference date ``now``.  When it
        is omitted the engine asks its clock for today's date.
    Non-goals:
        - Does not read or write any store; list filtering beyond
          ``active_items`` belongs to the caller.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        counting: MonthCounting = MonthCounting.CALENDAR,
    ):
        self._clock = clock or SystemClock()
        self._counting = counting

    @property
    def counting(self) -> MonthCounting:
        return self._counting

    def _reference_date(self, now: date | datetime | None) -> date:
        if now is None:
            return self._clock.today()
        return as_date(now)

    def months_elapsed(
        self, issued_on: date, now: date | datetime | None = None
    ) -> int:
        """Whole months from issuance to ``now`` (negative for future issuance)."""
        return months_between(issued_on, self._reference_date(now), self._counting)

    def tier_percent(
        self,
        issued_on: date,
        now: date | datetime | None = None,
        schedule: DepreciationSchedule = UNIFORM_SCHEDULE,
    ) -> int:
        """Percent of the original value still retained at ``now``."""
        return schedule.percent_for(self.months_elapsed(issued_on, now))

    def current_value(
        self,
        original_value: Decimal,
        issued_on: date,
        now: date | datetime | None = None,
        schedule: DepreciationSchedule = UNIFORM_SCHEDULE,
    ) -> Decimal:
        """``original_value * tier_percent / 100`` with no rounding."""
        percent = self.tier_percent(issued_on, now, schedule)
        return original_value * Decimal(percent) / _HUNDRED

    def is_expired(
        self,
        issued_on: date,
        now: date | datetime | None = None,
        schedule: DepreciationSchedule = UNIFORM_SCHEDULE,
    ) -> bool:
        """True once the tier has reached 0%."""
        return self.tier_percent(issued_on, now, schedule) == 0

    @traced_engine("benefit_depreciation", "1.0", fingerprint_fields=("now",))
    def valuate(
        self,
        item: BenefitItem,
        now: date | datetime | None = None,
        schedule: DepreciationSchedule = UNIFORM_SCHEDULE,
    ) -> BenefitValuation:
        """Tier, current value, depreciation and expiry for one item."""
        as_of = self._reference_date(now)
        months = months_between(item.issued_on, as_of, self._counting)
        percent = schedule.percent_for(months)
        current = item.original_value * Decimal(percent) / _HUNDRED
        return BenefitValuation(
            item=item,
            as_of=as_of,
            months_elapsed=months,
            tier_percent=percent,
            current_value=current,
            depreciation=item.original_value - current,
            is_expired=percent == 0,
        )

    def valuate_all(
        self,
        items: Iterable[BenefitItem],
        now: date | datetime | None = None,
        schedule: DepreciationSchedule = UNIFORM_SCHEDULE,
    ) -> tuple[BenefitValuation, ...]:
        """Value every item against one reference date."""
        as_of = self._reference_date(now)
        return tuple(self.valuate(item, now=as_of, schedule=schedule) for item in items)

    def active_items(
        self,
        items: Sequence[BenefitItem],
        now: date | datetime | None = None,
        schedule: DepreciationSchedule = UNIFORM_SCHEDULE,
    ) -> tuple[BenefitItem, ...]:
        """Items whose tier is still above 0% at ``now``."""
        as_of = self._reference_date(now)
        active = tuple(
            item for item in items
            if not self.is_expired(item.issued_on, as_of, schedule)
        )
        logger.debug(
            "benefit_items_filtered",
            extra={
                "schedule": schedule.name,
                "as_of": as_of.isoformat(),
                "total": len(items),
                "active": len(active),
            },
        )
        return active
