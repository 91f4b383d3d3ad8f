"""Example: drive the service layer directly, without Flask.

Controllers stay thin; the calendar rules live in the services.
"""

import importlib

from config import get_settings_module

from src.staff_calendar.staff_calendar.container import build_container
from src.staff_calendar.staff_calendar.core.enums import Role
from src.staff_calendar.staff_calendar.users.model import Actor


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    employee = Actor(user_id=3, role=Role.EMPLOYEE)
    print([a.to_dict() for a in container.assignment_service.list_for_actor(actor=employee)])
    print(container.meal_voucher_service.monthly_worked_days(user_id=employee.user_id, month=4, year=2024).to_dict())


if __name__ == "__main__":
    main()
