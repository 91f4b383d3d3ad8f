from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence, Union

from ..common.authorization import Action, ensure_allowed, ensure_role, facts_for, is_unconditional
from ..common.datetime_utils import normalize_date
from ..common.validators import require_id
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..database.locking import EmployeeLock, LocalEmployeeLock
from ..projects.repository import ProjectRepository
from ..users.model import Actor
from ..users.repository import UserRepository
from .model import Assignment
from .repository import AssignmentRepository

logger = logging.getLogger(__name__)


class AssignmentService:
    """Use cases: assign employees to projects over date ranges."""

    def __init__(
        self,
        assignments: AssignmentRepository,
        projects: ProjectRepository,
        users: UserRepository,
        *,
        locks: Optional[EmployeeLock] = None,
    ):
        self._assignments = assignments
        self._projects = projects
        self._users = users
        self._locks = locks or LocalEmployeeLock()

    def create(
        self,
        *,
        actor: Actor,
        user_id: int,
        project_id: int,
        start_date: Union[date, str],
        end_date: Union[date, str],
    ) -> Assignment:
        ensure_role(Action.CREATE_ASSIGNMENT, actor.role, "Only admins or project managers can perform this action")
        user_id = require_id(user_id, "user_id")
        project_id = require_id(project_id, "project_id")

        start = normalize_date(start_date, "start date")
        end = normalize_date(end_date, "end date")
        if end < start:
            raise ValidationError("End date must be on or after start date")

        project = self._projects.get_by_id(int(project_id))
        if not project:
            raise NotFoundError("Project not found")

        ensure_allowed(
            Action.CREATE_ASSIGNMENT,
            actor.role,
            facts_for(manager=project.is_managed_by(actor.user_id)),
            "Project managers can only assign users to their projects",
        )

        with self._locks.hold(int(user_id)):
            if not self._users.exists(int(user_id)):
                raise NotFoundError(f"User with ID {user_id} not found")

            if self._assignments.find_overlapping(user_id=int(user_id), start=start, end=end):
                raise ConflictError("User already assigned to a project during this period")

            assignment_id = self._assignments.create(
                user_id=int(user_id),
                project_id=project.project_id,
                start=start,
                end=end,
            )
            created = self._assignments.get_by_id(assignment_id)

        if not created:
            raise NotFoundError("Assignment not found")

        logger.info(
            "Assignment %s created: user=%s project=%s %s..%s by user %s",
            created.assignment_id, created.user_id, created.project_id, start, end, actor.user_id,
        )
        return created

    def list_for_actor(self, *, actor: Actor) -> Sequence[Assignment]:
        if is_unconditional(Action.READ_ASSIGNMENT, actor.role):
            return self._assignments.list_all()
        return self._assignments.list_for_user(actor.user_id)

    def get_for_actor(self, *, actor: Actor, assignment_id: int) -> Assignment:
        assignment = self._assignments.get_by_id(int(assignment_id))
        if not assignment:
            raise NotFoundError("Assignment not found")

        ensure_allowed(
            Action.READ_ASSIGNMENT,
            actor.role,
            facts_for(owner=actor.is_(assignment.user_id)),
            "You do not have access to this assignment",
        )
        return assignment

    def remove(self, *, actor: Actor, assignment_id: int) -> Assignment:
        ensure_role(Action.REMOVE_ASSIGNMENT, actor.role, "Only admins or project managers can perform this action")

        assignment = self._assignments.get_by_id(int(assignment_id))
        if not assignment:
            raise NotFoundError("Assignment not found")

        project = self._projects.get_by_id(assignment.project_id)
        ensure_allowed(
            Action.REMOVE_ASSIGNMENT,
            actor.role,
            facts_for(manager=bool(project and project.is_managed_by(actor.user_id))),
            "Project managers can only remove assignments of their projects",
        )

        with self._locks.hold(assignment.user_id):
            if not self._assignments.delete(assignment_id=assignment.assignment_id):
                raise NotFoundError("Assignment not found")

        logger.info("Assignment %s removed by user %s", assignment.assignment_id, actor.user_id)
        return assignment
