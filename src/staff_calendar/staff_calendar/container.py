from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .assignments.mysql_assignment_repository import MySQLAssignmentRepository
from .assignments.repository import AssignmentRepository
from .assignments.service import AssignmentService
from .core.constants import DEFAULT_MEAL_VOUCHER_CURRENCY, DEFAULT_MEAL_VOUCHER_DAILY_RATE
from .database.connection import DBConfig, DatabaseConnection
from .database.locking import MySQLEmployeeLock
from .events.mysql_event_repository import MySQLEventRepository
from .events.repository import EventRepository
from .events.service import EventService
from .payroll.service import MealVoucherService
from .projects.mysql_project_repository import MySQLProjectRepository
from .projects.repository import ProjectRepository
from .projects.service import ProjectService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    projects_repo: ProjectRepository
    assignments_repo: AssignmentRepository
    events_repo: EventRepository

    project_service: ProjectService
    assignment_service: AssignmentService
    event_service: EventService
    meal_voucher_service: MealVoucherService


def build_container(
    *,
    db_config: dict,
    meal_voucher_daily_rate=DEFAULT_MEAL_VOUCHER_DAILY_RATE,
    meal_voucher_currency: str = DEFAULT_MEAL_VOUCHER_CURRENCY,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)
    locks = MySQLEmployeeLock(conn)

    users_repo = MySQLUserRepository(conn)
    projects_repo = MySQLProjectRepository(conn)
    assignments_repo = MySQLAssignmentRepository(conn)
    events_repo = MySQLEventRepository(conn)

    project_service = ProjectService(projects_repo, assignments_repo, users_repo)
    assignment_service = AssignmentService(assignments_repo, projects_repo, users_repo, locks=locks)
    event_service = EventService(events_repo, assignments_repo, users_repo, locks=locks)
    meal_voucher_service = MealVoucherService(
        events_repo,
        users_repo,
        daily_rate=meal_voucher_daily_rate,
        currency=meal_voucher_currency,
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        projects_repo=projects_repo,
        assignments_repo=assignments_repo,
        events_repo=events_repo,
        project_service=project_service,
        assignment_service=assignment_service,
        event_service=event_service,
        meal_voucher_service=meal_voucher_service,
    )
