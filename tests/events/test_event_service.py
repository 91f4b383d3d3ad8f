from __future__ import annotations

from datetime import date, datetime

import pytest

from src.staff_calendar.staff_calendar.core.enums import EventStatus, EventType, Role
from src.staff_calendar.staff_calendar.core.exceptions import (
    AuthorizationError,
    ConflictError,
    InvalidOperationError,
    NotFoundError,
    QuotaExceededError,
    ValidationError,
)
from src.staff_calendar.staff_calendar.events.service import initial_status


@pytest.fixture
def apollo_assignment(assignments_repo, projects_repo, employee):
    apollo = projects_repo.get_by_name("Apollo")
    return assignments_repo.create(
        user_id=employee.user_id,
        project_id=apollo.project_id,
        start=date(2024, 5, 1),
        end=date(2024, 5, 31),
    )


def test_remote_work_quota_two_per_week(event_service, employee):
    monday = event_service.create(actor=employee, event_date="2024-05-06", event_type="RemoteWork")
    tuesday = event_service.create(actor=employee, event_date="2024-05-07", event_type="RemoteWork")

    assert monday.status == EventStatus.ACCEPTED
    assert tuesday.status == EventStatus.ACCEPTED

    with pytest.raises(QuotaExceededError):
        event_service.create(actor=employee, event_date="2024-05-08", event_type="RemoteWork")


def test_quota_resets_on_next_monday(event_service, employee):
    event_service.create(actor=employee, event_date="2024-05-09", event_type="RemoteWork")
    event_service.create(actor=employee, event_date="2024-05-12", event_type="RemoteWork")  # Sunday

    nxt = event_service.create(actor=employee, event_date="2024-05-13", event_type="RemoteWork")
    assert nxt.event_date == date(2024, 5, 13)


def test_paid_leave_does_not_count_towards_remote_quota(event_service, employee):
    event_service.create(actor=employee, event_date="2024-05-06", event_type="PaidLeave")
    event_service.create(actor=employee, event_date="2024-05-07", event_type="RemoteWork")
    event_service.create(actor=employee, event_date="2024-05-08", event_type="RemoteWork")

    with pytest.raises(QuotaExceededError):
        event_service.create(actor=employee, event_date="2024-05-09", event_type="RemoteWork")


def test_one_event_per_day(event_service, employee):
    event_service.create(actor=employee, event_date=date(2024, 5, 6), event_type=EventType.PAID_LEAVE)

    with pytest.raises(ConflictError):
        event_service.create(actor=employee, event_date="2024-05-06T15:30:00Z", event_type="RemoteWork")


def test_create_normalizes_datetime_to_day(event_service, employee):
    event = event_service.create(actor=employee, event_date=datetime(2024, 5, 6, 18, 45), event_type="RemoteWork")
    assert event.event_date == date(2024, 5, 6)


def test_create_rejects_bad_input(event_service, employee):
    with pytest.raises(ValidationError):
        event_service.create(actor=employee, event_date="not-a-date", event_type="RemoteWork")
    with pytest.raises(ValidationError):
        event_service.create(actor=employee, event_date="2024-05-06", event_type="Holiday")


def test_initial_status_is_a_function_of_type_and_role():
    assert initial_status(EventType.REMOTE_WORK, Role.EMPLOYEE) == EventStatus.ACCEPTED
    assert initial_status(EventType.PAID_LEAVE, Role.EMPLOYEE) == EventStatus.PENDING
    assert initial_status(EventType.PAID_LEAVE, Role.PROJECT_MANAGER) == EventStatus.ACCEPTED
    assert initial_status(EventType.PAID_LEAVE, Role.ADMIN) == EventStatus.ACCEPTED


def test_admin_files_leave_on_behalf_auto_accepted(event_service, admin, employee):
    event = event_service.create(
        actor=admin,
        user_id=employee.user_id,
        event_date="2024-05-20",
        event_type="PaidLeave",
        description="  family trip  ",
    )

    assert event.user_id == employee.user_id
    assert event.status == EventStatus.ACCEPTED
    assert event.description == "family trip"


def test_employee_cannot_file_for_someone_else(event_service, employee, other_employee):
    with pytest.raises(AuthorizationError):
        event_service.create(
            actor=employee,
            user_id=other_employee.user_id,
            event_date="2024-05-20",
            event_type="PaidLeave",
        )


def test_on_behalf_of_unknown_user(event_service, admin):
    with pytest.raises(NotFoundError):
        event_service.create(actor=admin, user_id=999, event_date="2024-05-20", event_type="PaidLeave")


def test_manager_validates_leave_other_manager_forbidden(event_service, events_repo, employee, pm1, pm2, apollo_assignment):
    leave = event_service.create(actor=employee, event_date="2024-05-15", event_type="PaidLeave")
    assert leave.status == EventStatus.PENDING

    with pytest.raises(AuthorizationError):
        event_service.validate(approver=pm2, event_id=leave.event_id)
    assert events_repo.get_by_id(leave.event_id).status == EventStatus.PENDING

    validated = event_service.validate(approver=pm1, event_id=leave.event_id)
    assert validated.status == EventStatus.ACCEPTED
    assert events_repo.get_by_id(leave.event_id).status == EventStatus.ACCEPTED


def test_admin_declines_any_project(event_service, events_repo, employee, admin, apollo_assignment):
    leave = event_service.create(actor=employee, event_date="2024-05-15", event_type="PaidLeave")

    declined = event_service.decline(approver=admin, event_id=leave.event_id)

    assert declined.status == EventStatus.DECLINED
    assert events_repo.get_by_id(leave.event_id).status == EventStatus.DECLINED


def test_resolved_leave_cannot_be_decided_again(event_service, employee, pm1, apollo_assignment):
    leave = event_service.create(actor=employee, event_date="2024-05-15", event_type="PaidLeave")
    event_service.validate(approver=pm1, event_id=leave.event_id)

    with pytest.raises(InvalidOperationError):
        event_service.decline(approver=pm1, event_id=leave.event_id)


def test_remote_work_is_never_approved(event_service, employee, admin, apollo_assignment):
    remote = event_service.create(actor=employee, event_date="2024-05-15", event_type="RemoteWork")

    with pytest.raises(InvalidOperationError):
        event_service.validate(approver=admin, event_id=remote.event_id)


def test_approval_needs_covering_assignment(event_service, employee, admin, apollo_assignment):
    leave = event_service.create(actor=employee, event_date="2024-06-03", event_type="PaidLeave")

    with pytest.raises(InvalidOperationError):
        event_service.validate(approver=admin, event_id=leave.event_id)


def test_approval_checks_existence_then_role(event_service, employee, apollo_assignment):
    with pytest.raises(NotFoundError):
        event_service.validate(approver=employee, event_id=404)

    leave = event_service.create(actor=employee, event_date="2024-05-15", event_type="PaidLeave")
    with pytest.raises(AuthorizationError):
        event_service.validate(approver=employee, event_id=leave.event_id)


def test_event_queries(event_service, events_repo, employee, other_employee):
    events_repo.add(user_id=employee.user_id, day=date(2024, 4, 30), event_type=EventType.PAID_LEAVE, status=EventStatus.ACCEPTED)
    events_repo.add(user_id=employee.user_id, day=date(2024, 5, 2), event_type=EventType.PAID_LEAVE, status=EventStatus.ACCEPTED)
    events_repo.add(user_id=employee.user_id, day=date(2024, 5, 3), event_type=EventType.REMOTE_WORK, status=EventStatus.ACCEPTED)
    events_repo.add(user_id=other_employee.user_id, day=date(2024, 5, 6), event_type=EventType.PAID_LEAVE, status=EventStatus.PENDING)
    events_repo.add(user_id=other_employee.user_id, day=date(2024, 5, 7), event_type=EventType.PAID_LEAVE, status=EventStatus.ACCEPTED)

    mine = event_service.list_for_user_in_month(user_id=employee.user_id, month=5, year=2024)
    assert [e.event_date for e in mine] == [date(2024, 5, 2), date(2024, 5, 3)]

    leaves = event_service.list_accepted_paid_leaves_in_month(year=2024, month=5)
    assert [(e.user_id, e.event_date) for e in leaves] == [
        (employee.user_id, date(2024, 5, 2)),
        (other_employee.user_id, date(2024, 5, 7)),
    ]

    assert [e.event_date for e in event_service.list_all()][0] == date(2024, 4, 30)
    assert event_service.list_all() == event_service.list_all()

    with pytest.raises(NotFoundError):
        event_service.get(999)
    with pytest.raises(ValidationError):
        event_service.list_for_user_in_month(user_id=employee.user_id, month=13, year=2024)
