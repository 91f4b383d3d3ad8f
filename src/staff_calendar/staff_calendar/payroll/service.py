from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union

from ..common.datetime_utils import month_bounds, today
from ..common.validators import require_month, require_year
from ..core.constants import DEFAULT_MEAL_VOUCHER_CURRENCY, DEFAULT_MEAL_VOUCHER_DAILY_RATE
from ..core.exceptions import NotFoundError
from ..events.repository import EventRepository
from ..users.repository import UserRepository
from .calculator.base import WorkedDayCalculator
from .calculator.standard_calculator import StandardWorkedDayCalculator

Number = Union[int, float, Decimal]


@dataclass(frozen=True)
class MealVoucherSummary:
    employee_id: int
    month: int
    year: int
    worked_days: int
    amount: Number
    currency: str

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "month": self.month,
            "year": self.year,
            "worked_days": self.worked_days,
            "amount": self.amount,
            "currency": self.currency,
        }


class MealVoucherService:
    """Read-only aggregation: worked days and meal-voucher amount for a month."""

    def __init__(
        self,
        events: EventRepository,
        users: UserRepository,
        *,
        calculator: Optional[WorkedDayCalculator] = None,
        daily_rate: Number = DEFAULT_MEAL_VOUCHER_DAILY_RATE,
        currency: str = DEFAULT_MEAL_VOUCHER_CURRENCY,
    ):
        self._events = events
        self._users = users
        self._calculator = calculator or StandardWorkedDayCalculator()
        self._daily_rate = daily_rate
        self._currency = currency

    def monthly_worked_days(self, *, user_id: int, month: int, year: Optional[int] = None) -> MealVoucherSummary:
        m = require_month(month)
        y = require_year(year) if year is not None else today().year

        if not self._users.exists(int(user_id)):
            raise NotFoundError(f"User with ID {user_id} not found")

        start, end = month_bounds(y, m)
        events = self._events.list_for_user_in_range(user_id=int(user_id), start=start, end=end)
        days = self._calculator.worked_days(start=start, end=end, events=events)

        return MealVoucherSummary(
            employee_id=int(user_id),
            month=m,
            year=y,
            worked_days=len(days),
            amount=len(days) * self._daily_rate,
            currency=self._currency,
        )
