from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..assignments.repository import AssignmentRepository
from ..common.authorization import Action, ensure_allowed, ensure_role, facts_for, is_unconditional, role_may
from ..common.validators import optional_text, require_id, require_min_length
from ..core.constants import PROJECT_NAME_MIN_LENGTH
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError
from ..users.model import Actor
from ..users.repository import UserRepository
from .model import Project
from .repository import ProjectRepository

logger = logging.getLogger(__name__)


class ProjectService:
    """Use cases: projects and the employee who refers (manages) them."""

    def __init__(
        self,
        projects: ProjectRepository,
        assignments: AssignmentRepository,
        users: UserRepository,
    ):
        self._projects = projects
        self._assignments = assignments
        self._users = users

    def _require_active(self, project_id: int) -> Project:
        project = self._projects.get_by_id(int(project_id))
        if not project or project.archived:
            raise NotFoundError("Project not found")
        return project

    def _check_referrer(self, referring_employee_id: int) -> int:
        referring_employee_id = require_id(referring_employee_id, "referring_employee_id")
        referrer = self._users.get_by_id(referring_employee_id)
        if not referrer:
            raise NotFoundError(f"User with ID {referring_employee_id} not found")
        if not role_may(Action.REFER_PROJECT, referrer.role):
            raise AuthorizationError("Referring employee must be an admin or a project manager")
        return referrer.user_id

    def _check_name_free(self, name: str, *, project_id: Optional[int] = None) -> None:
        existing = self._projects.get_by_name(name)
        if existing and existing.project_id != project_id:
            raise ConflictError("A project with this name already exists")

    def create(
        self,
        *,
        actor: Actor,
        name: str,
        referring_employee_id: int,
        description: Optional[str] = None,
    ) -> Project:
        ensure_role(Action.CREATE_PROJECT, actor.role, "Only admins can create projects")

        name = require_min_length(name, "Project name", PROJECT_NAME_MIN_LENGTH)
        referrer_id = self._check_referrer(referring_employee_id)
        self._check_name_free(name)

        project_id = self._projects.create(
            name=name,
            description=optional_text(description),
            referring_employee_id=referrer_id,
        )
        created = self._projects.get_by_id(project_id)
        if not created:
            raise NotFoundError("Project not found")

        logger.info("Project %s '%s' created by user %s", created.project_id, created.name, actor.user_id)
        return created

    def list_for_actor(self, *, actor: Actor) -> Sequence[Project]:
        projects = self._projects.list_active()
        if is_unconditional(Action.READ_PROJECT, actor.role):
            return projects

        assigned = {a.project_id for a in self._assignments.list_for_user(actor.user_id)}
        return [p for p in projects if p.project_id in assigned]

    def get_for_actor(self, *, actor: Actor, project_id: int) -> Project:
        project = self._require_active(project_id)

        if not is_unconditional(Action.READ_PROJECT, actor.role):
            assigned = any(a.project_id == project.project_id for a in self._assignments.list_for_user(actor.user_id))
            ensure_allowed(
                Action.READ_PROJECT,
                actor.role,
                facts_for(assigned=assigned),
                "You do not have access to this project",
            )
        return project

    def update(
        self,
        *,
        actor: Actor,
        project_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        referring_employee_id: Optional[int] = None,
    ) -> Project:
        ensure_role(Action.UPDATE_PROJECT, actor.role, "Only admins or project managers can update projects")

        project = self._require_active(project_id)
        ensure_allowed(
            Action.UPDATE_PROJECT,
            actor.role,
            facts_for(manager=project.is_managed_by(actor.user_id)),
            "Project managers can only update their own projects",
        )

        new_name = project.name
        if name is not None:
            new_name = require_min_length(name, "Project name", PROJECT_NAME_MIN_LENGTH)
            self._check_name_free(new_name, project_id=project.project_id)

        new_referrer = project.referring_employee_id
        if referring_employee_id is not None:
            new_referrer = self._check_referrer(referring_employee_id)

        new_description = project.description if description is None else optional_text(description)

        if not self._projects.update(
            project_id=project.project_id,
            name=new_name,
            description=new_description,
            referring_employee_id=new_referrer,
        ):
            raise NotFoundError("Project not found")

        logger.info("Project %s updated by user %s", project.project_id, actor.user_id)
        return self._require_active(project.project_id)

    def archive(self, *, actor: Actor, project_id: int) -> Project:
        ensure_role(Action.ARCHIVE_PROJECT, actor.role, "Only admins can archive projects")

        project = self._projects.get_by_id(int(project_id))
        if not project:
            raise NotFoundError("Project not found")

        if not self._projects.set_archived(project_id=project.project_id, archived=True):
            raise NotFoundError("Project not found")

        logger.info("Project %s archived by user %s", project.project_id, actor.user_id)
        return self._projects.get_by_id(project.project_id) or project
