from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional

import pytest

from src.staff_calendar.staff_calendar.assignments.model import Assignment
from src.staff_calendar.staff_calendar.assignments.service import AssignmentService
from src.staff_calendar.staff_calendar.container import Container
from src.staff_calendar.staff_calendar.core.enums import EventStatus, EventType, Role
from src.staff_calendar.staff_calendar.core.exceptions import ConflictError, DomainError
from src.staff_calendar.staff_calendar.events.model import Event
from src.staff_calendar.staff_calendar.events.service import EventService
from src.staff_calendar.staff_calendar.payroll.service import MealVoucherService
from src.staff_calendar.staff_calendar.projects.model import Project
from src.staff_calendar.staff_calendar.projects.service import ProjectService
from src.staff_calendar.staff_calendar.users.model import Actor, User

ADMIN_ID = 1
PM1_ID = 2
PM2_ID = 3
EMPLOYEE_ID = 4
OTHER_EMPLOYEE_ID = 5

APOLLO_ID = 1
ZEUS_ID = 2


@dataclass
class InMemoryUsers:
    users_by_id: dict[int, User]

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users_by_id.get(int(user_id))

    def exists(self, user_id: int) -> bool:
        return int(user_id) in self.users_by_id


@dataclass
class InMemoryProjects:
    projects: dict[int, Project] = field(default_factory=dict)

    def get_by_id(self, project_id: int) -> Optional[Project]:
        return self.projects.get(int(project_id))

    def get_by_name(self, name: str) -> Optional[Project]:
        for p in self.projects.values():
            if p.name == name:
                return p
        return None

    def list_active(self):
        items = [p for p in self.projects.values() if not p.archived]
        items.sort(key=lambda p: p.project_id, reverse=True)
        return items

    def create(self, *, name, description, referring_employee_id) -> int:
        if self.get_by_name(name):
            raise ConflictError("A project with this name already exists")
        pid = max(self.projects, default=0) + 1
        self.projects[pid] = Project(
            project_id=pid,
            name=name,
            description=description,
            referring_employee_id=int(referring_employee_id),
            created_at=datetime(2024, 1, 1, 9, 0),
        )
        return pid

    def update(self, *, project_id, name, description, referring_employee_id) -> bool:
        p = self.projects.get(int(project_id))
        if not p:
            return False
        self.projects[p.project_id] = replace(
            p, name=name, description=description, referring_employee_id=int(referring_employee_id)
        )
        return True

    def set_archived(self, *, project_id, archived) -> bool:
        p = self.projects.get(int(project_id))
        if not p:
            return False
        self.projects[p.project_id] = replace(p, archived=bool(archived))
        return True


class InMemoryAssignments:
    """Fills in the project join data the way the SQL JOIN does."""

    def __init__(self, projects: InMemoryProjects):
        self._projects = projects
        self._rows: dict[int, Assignment] = {}
        self._id = 0

    def _joined(self, a: Assignment) -> Assignment:
        p = self._projects.get_by_id(a.project_id)
        if not p:
            return a
        return replace(a, project_name=p.name, project_manager_id=p.referring_employee_id)

    def find_overlapping(self, *, user_id, start, end) -> Optional[Assignment]:
        for a in self._rows.values():
            if a.user_id == int(user_id) and a.overlaps(start, end):
                return self._joined(a)
        return None

    def find_covering_date(self, *, user_id, day) -> Optional[Assignment]:
        for a in self._rows.values():
            if a.user_id == int(user_id) and a.covers(day):
                return self._joined(a)
        return None

    def get_by_id(self, assignment_id) -> Optional[Assignment]:
        a = self._rows.get(int(assignment_id))
        return self._joined(a) if a else None

    def list_all(self):
        return [self._joined(a) for a in sorted(self._rows.values(), key=lambda a: a.start_date)]

    def list_for_user(self, user_id):
        return [a for a in self.list_all() if a.user_id == int(user_id)]

    def create(self, *, user_id, project_id, start, end) -> int:
        self._id += 1
        self._rows[self._id] = Assignment(
            assignment_id=self._id,
            user_id=int(user_id),
            project_id=int(project_id),
            start_date=start,
            end_date=end,
        )
        return self._id

    def delete(self, *, assignment_id) -> bool:
        return self._rows.pop(int(assignment_id), None) is not None


class InMemoryEvents:
    def __init__(self):
        self._rows: dict[int, Event] = {}
        self._id = 0

    def find_by_user_and_date(self, *, user_id, day) -> Optional[Event]:
        for e in self._rows.values():
            if e.user_id == int(user_id) and e.event_date == day:
                return e
        return None

    def count_by_user_type_and_range(self, *, user_id, event_type, start, end) -> int:
        return sum(
            1
            for e in self._rows.values()
            if e.user_id == int(user_id) and e.event_type == event_type and start <= e.event_date <= end
        )

    def get_by_id(self, event_id) -> Optional[Event]:
        return self._rows.get(int(event_id))

    def list_all(self):
        return sorted(self._rows.values(), key=lambda e: (e.event_date, e.event_id))

    def list_for_user_in_range(self, *, user_id, start, end):
        return [e for e in self.list_all() if e.user_id == int(user_id) and start <= e.event_date <= end]

    def list_by_type_status_in_range(self, *, event_type, status, start, end):
        return [
            e
            for e in self.list_all()
            if e.event_type == event_type and e.status == status and start <= e.event_date <= end
        ]

    def create(self, *, user_id, day, event_type, status, description) -> int:
        if self.find_by_user_and_date(user_id=user_id, day=day):
            raise ConflictError("An event already exists for this user on the selected date")
        self._id += 1
        self._rows[self._id] = Event(
            event_id=self._id,
            user_id=int(user_id),
            event_date=day,
            event_type=event_type,
            status=status,
            description=description,
        )
        return self._id

    def update_status(self, *, event_id, status, expected) -> bool:
        e = self._rows.get(int(event_id))
        if not e or e.status != expected:
            return False
        self._rows[e.event_id] = e.with_status(status)
        return True

    def delete(self, *, event_id) -> bool:
        return self._rows.pop(int(event_id), None) is not None

    def add(self, *, user_id: int, day: date, event_type: EventType, status: EventStatus) -> Event:
        """Test helper: store an event bypassing the service rules."""
        event_id = self.create(user_id=user_id, day=day, event_type=event_type, status=status, description=None)
        return self._rows[event_id]


@pytest.fixture
def users_repo():
    people = [
        User(user_id=ADMIN_ID, username="admin", email="admin@example.com", role=Role.ADMIN),
        User(user_id=PM1_ID, username="pm1", email="pm1@example.com", role=Role.PROJECT_MANAGER),
        User(user_id=PM2_ID, username="pm2", email="pm2@example.com", role=Role.PROJECT_MANAGER),
        User(user_id=EMPLOYEE_ID, username="alice", email="alice@example.com", role=Role.EMPLOYEE),
        User(user_id=OTHER_EMPLOYEE_ID, username="bob", email="bob@example.com", role=Role.EMPLOYEE),
    ]
    return InMemoryUsers(users_by_id={u.user_id: u for u in people})


@pytest.fixture
def projects_repo():
    repo = InMemoryProjects()
    repo.create(name="Apollo", description="Run by pm1", referring_employee_id=PM1_ID)
    repo.create(name="Zeus", description="Run by pm2", referring_employee_id=PM2_ID)
    return repo


@pytest.fixture
def assignments_repo(projects_repo):
    return InMemoryAssignments(projects_repo)


@pytest.fixture
def events_repo():
    return InMemoryEvents()


@pytest.fixture
def admin():
    return Actor(user_id=ADMIN_ID, role=Role.ADMIN)


@pytest.fixture
def pm1():
    return Actor(user_id=PM1_ID, role=Role.PROJECT_MANAGER)


@pytest.fixture
def pm2():
    return Actor(user_id=PM2_ID, role=Role.PROJECT_MANAGER)


@pytest.fixture
def employee():
    return Actor(user_id=EMPLOYEE_ID, role=Role.EMPLOYEE)


@pytest.fixture
def other_employee():
    return Actor(user_id=OTHER_EMPLOYEE_ID, role=Role.EMPLOYEE)


@pytest.fixture
def event_service(events_repo, assignments_repo, users_repo):
    return EventService(events_repo, assignments_repo, users_repo)


@pytest.fixture
def assignment_service(assignments_repo, projects_repo, users_repo):
    return AssignmentService(assignments_repo, projects_repo, users_repo)


@pytest.fixture
def project_service(projects_repo, assignments_repo, users_repo):
    return ProjectService(projects_repo, assignments_repo, users_repo)


@pytest.fixture
def meal_voucher_service(events_repo, users_repo):
    return MealVoucherService(events_repo, users_repo, daily_rate=8, currency="EUR")


@pytest.fixture
def container(users_repo, projects_repo, assignments_repo, events_repo,
              project_service, assignment_service, event_service, meal_voucher_service):
    return Container(
        conn=None,
        users_repo=users_repo,
        projects_repo=projects_repo,
        assignments_repo=assignments_repo,
        events_repo=events_repo,
        project_service=project_service,
        assignment_service=assignment_service,
        event_service=event_service,
        meal_voucher_service=meal_voucher_service,
    )


@pytest.fixture
def client(container, monkeypatch):
    from src.staff_calendar.staff_calendar.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()


@pytest.fixture
def auth_headers():
    def _headers(actor: Actor) -> dict:
        return {"X-User-Id": str(actor.user_id), "X-User-Role": actor.role.value}

    return _headers


@pytest.fixture
def run_in_threads():
    """Start ``count`` threads on ``work(index)`` together; returns what each produced.

    A ``DomainError`` is reported by its ``kind`` so callers can compare outcomes.
    """

    def _run(count: int, work) -> list:
        barrier = threading.Barrier(count)
        outcomes: list = [None] * count

        def _worker(index: int) -> None:
            barrier.wait()
            try:
                outcomes[index] = work(index)
            except DomainError as e:
                outcomes[index] = e.kind

        threads = [threading.Thread(target=_worker, args=(i,)) for i in range(count)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)
        assert not any(t.is_alive() for t in threads)
        return outcomes

    return _run
