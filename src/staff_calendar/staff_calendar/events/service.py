from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence, Union

from ..assignments.repository import AssignmentRepository
from ..common.authorization import Action, ensure_allowed, ensure_role, facts_for
from ..common.datetime_utils import month_bounds, normalize_date, today as local_today, week_bounds
from ..common.validators import optional_text, require_month, require_year
from ..core.constants import PAID_LEAVE_SELF_CANCEL_NOTICE_DAYS, REMOTE_WORK_WEEKLY_QUOTA
from ..core.enums import EventStatus, EventType, Role
from ..core.exceptions import (
    ConflictError,
    InvalidOperationError,
    NotFoundError,
    QuotaExceededError,
    ValidationError,
)
from ..database.locking import EmployeeLock, LocalEmployeeLock
from ..users.model import Actor
from ..users.repository import UserRepository
from .model import Event
from .repository import EventRepository

logger = logging.getLogger(__name__)

_CANCEL_LEAVE_DENIED = {
    Role.PROJECT_MANAGER: "Project managers can only cancel paid leaves for their projects",
    Role.EMPLOYEE: "You can only cancel your own paid leaves",
}


def parse_event_type(value: Union[EventType, str]) -> EventType:
    if isinstance(value, EventType):
        return value
    try:
        return EventType(str(value).strip())
    except ValueError:
        raise ValidationError("Invalid event type")


def initial_status(event_type: EventType, role: Role) -> EventStatus:
    """Status a new event starts in.

    Remote work never needs approval (the weekly quota caps it instead).
    Paid leave waits for approval unless a manager or admin files it.
    """

    if event_type == EventType.REMOTE_WORK:
        return EventStatus.ACCEPTED
    if role == Role.EMPLOYEE:
        return EventStatus.PENDING
    return EventStatus.ACCEPTED


class EventService:
    """Calendar events: creation, approval workflow and cancellation."""

    def __init__(
        self,
        events: EventRepository,
        assignments: AssignmentRepository,
        users: UserRepository,
        *,
        locks: Optional[EmployeeLock] = None,
        weekly_remote_quota: int = REMOTE_WORK_WEEKLY_QUOTA,
    ):
        self._events = events
        self._assignments = assignments
        self._users = users
        self._locks = locks or LocalEmployeeLock()
        self._weekly_remote_quota = int(weekly_remote_quota)

    def _require(self, event_id: int) -> Event:
        event = self._events.get_by_id(int(event_id))
        if not event:
            raise NotFoundError("Event not found")
        return event

    # -------- Creation --------
    def create(
        self,
        *,
        actor: Actor,
        event_date: Union[date, str],
        event_type: Union[EventType, str],
        description: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> Event:
        day = normalize_date(event_date)
        etype = parse_event_type(event_type)
        owner_id = int(user_id) if user_id is not None else int(actor.user_id)

        ensure_allowed(
            Action.CREATE_EVENT,
            actor.role,
            facts_for(owner=actor.is_(owner_id)),
            "You can only create events for yourself",
        )
        if not actor.is_(owner_id) and not self._users.exists(owner_id):
            raise NotFoundError(f"User with ID {owner_id} not found")

        with self._locks.hold(owner_id):
            if self._events.find_by_user_and_date(user_id=owner_id, day=day):
                raise ConflictError("An event already exists for this user on the selected date")

            if etype == EventType.REMOTE_WORK:
                week_start, week_end = week_bounds(day)
                taken = self._events.count_by_user_type_and_range(
                    user_id=owner_id,
                    event_type=EventType.REMOTE_WORK,
                    start=week_start,
                    end=week_end,
                )
                if taken >= self._weekly_remote_quota:
                    raise QuotaExceededError("Remote work quota exceeded for this week")

            status = initial_status(etype, actor.role)
            event_id = self._events.create(
                user_id=owner_id,
                day=day,
                event_type=etype,
                status=status,
                description=optional_text(description),
            )
            created = self._require(event_id)

        logger.info(
            "Event %s created: user=%s %s %s status=%s by user %s",
            created.event_id, owner_id, etype.value, day, status.value, actor.user_id,
        )
        return created

    # -------- Approval workflow --------
    def validate(self, *, approver: Actor, event_id: int) -> Event:
        return self._decide(approver, event_id, EventStatus.ACCEPTED, "validate")

    def decline(self, *, approver: Actor, event_id: int) -> Event:
        return self._decide(approver, event_id, EventStatus.DECLINED, "decline")

    def _decide(self, approver: Actor, event_id: int, status: EventStatus, verb: str) -> Event:
        event = self._require(event_id)
        ensure_role(Action.DECIDE_EVENT, approver.role, f"Only admins or project managers can {verb} events")

        with self._locks.hold(event.user_id):
            event = self._require(event_id)

            if event.event_type != EventType.PAID_LEAVE:
                raise InvalidOperationError("Only paid leave events can be validated or declined")
            if event.status != EventStatus.PENDING:
                raise InvalidOperationError("Event status can no longer be updated")

            assignment = self._assignments.find_covering_date(user_id=event.user_id, day=event.event_date)
            if not assignment:
                raise InvalidOperationError("The user is not assigned to any project on the event date")

            ensure_allowed(
                Action.DECIDE_EVENT,
                approver.role,
                facts_for(manager=assignment.is_managed_by(approver.user_id)),
                "Project managers can only process events for their projects",
            )

            if not self._events.update_status(event_id=event.event_id, status=status, expected=EventStatus.PENDING):
                raise InvalidOperationError("Event status can no longer be updated")

        logger.info("Event %s %s by user %s", event.event_id, status.value.lower(), approver.user_id)
        return event.with_status(status)

    # -------- Cancellation --------
    def cancel(self, *, actor: Actor, event_id: int, today: Optional[date] = None) -> Event:
        today = today or local_today()
        event = self._require(event_id)

        ensure_allowed(
            Action.CANCEL_EVENT,
            actor.role,
            facts_for(owner=actor.is_(event.user_id)),
            "You are not allowed to cancel this event",
        )

        with self._locks.hold(event.user_id):
            event = self._require(event_id)

            if event.event_type == EventType.REMOTE_WORK:
                self._check_remote_work_cancel(actor, event, today)
            elif event.event_type == EventType.PAID_LEAVE:
                self._check_paid_leave_cancel(actor, event, today)
            else:
                raise InvalidOperationError("This type of event cannot be cancelled")

            if not self._events.delete(event_id=event.event_id):
                raise NotFoundError("Event not found")

        logger.info("Event %s (%s %s) cancelled by user %s", event.event_id, event.event_type.value, event.event_date, actor.user_id)
        return event

    def _check_remote_work_cancel(self, actor: Actor, event: Event, today: date) -> None:
        ensure_allowed(
            Action.CANCEL_REMOTE_WORK,
            actor.role,
            facts_for(owner=actor.is_(event.user_id)),
            "You are not allowed to cancel this event",
        )
        if event.event_date < today:
            raise InvalidOperationError("You cannot cancel a remote work that is already in the past")

    def _check_paid_leave_cancel(self, actor: Actor, event: Event, today: date) -> None:
        assignment = self._assignments.find_covering_date(user_id=event.user_id, day=event.event_date)
        ensure_allowed(
            Action.CANCEL_PAID_LEAVE,
            actor.role,
            facts_for(
                owner=actor.is_(event.user_id),
                manager=bool(assignment and assignment.is_managed_by(actor.user_id)),
            ),
            _CANCEL_LEAVE_DENIED.get(actor.role, "You are not allowed to cancel this event"),
        )

        if actor.role != Role.EMPLOYEE:
            return

        # Self-service: the employee withdrawing their own leave.
        if event.event_date < today:
            raise InvalidOperationError("You cannot cancel a paid leave that is already in the past")
        if event.status == EventStatus.ACCEPTED and (event.event_date - today).days < PAID_LEAVE_SELF_CANCEL_NOTICE_DAYS:
            raise InvalidOperationError(
                "You can only cancel an accepted paid leave up to one week before. "
                "Please contact an admin or your project manager."
            )

    # -------- Queries --------
    def list_all(self) -> Sequence[Event]:
        return self._events.list_all()

    def get(self, event_id: int) -> Event:
        return self._require(event_id)

    def list_for_user_in_month(self, *, user_id: int, month: int, year: int) -> Sequence[Event]:
        start, end = month_bounds(require_year(year), require_month(month))
        return self._events.list_for_user_in_range(user_id=int(user_id), start=start, end=end)

    def list_accepted_paid_leaves_in_month(self, *, year: int, month: int) -> Sequence[Event]:
        start, end = month_bounds(require_year(year), require_month(month))
        return self._events.list_by_type_status_in_range(
            event_type=EventType.PAID_LEAVE,
            status=EventStatus.ACCEPTED,
            start=start,
            end=end,
        )
