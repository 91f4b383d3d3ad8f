"""Authorization rules as a lookup table.

Each entry maps ``(action, role)`` to the ownership facts the actor needs:

* ``None``: allowed unconditionally for that role.
* a frozenset: allowed when the actor holds at least one of the facts.
* missing key: denied.

Services collect the facts that apply to the call (is the actor the owner,
does the actor manage the project, ...) and ask the table.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

from ..core.enums import Role
from ..core.exceptions import AuthorizationError


class Action(str, Enum):
    CREATE_EVENT = "create_event"
    DECIDE_EVENT = "decide_event"
    CANCEL_EVENT = "cancel_event"
    CANCEL_REMOTE_WORK = "cancel_remote_work"
    CANCEL_PAID_LEAVE = "cancel_paid_leave"
    CREATE_ASSIGNMENT = "create_assignment"
    READ_ASSIGNMENT = "read_assignment"
    REMOVE_ASSIGNMENT = "remove_assignment"
    CREATE_PROJECT = "create_project"
    READ_PROJECT = "read_project"
    UPDATE_PROJECT = "update_project"
    ARCHIVE_PROJECT = "archive_project"
    REFER_PROJECT = "refer_project"
    READ_MEAL_VOUCHERS = "read_meal_vouchers"


class Fact(str, Enum):
    OWNER = "owner"
    MANAGER = "manager"
    ASSIGNED = "assigned"


def _needs(*facts: Fact) -> FrozenSet[Fact]:
    return frozenset(facts)


_RULES: Dict[Tuple[Action, Role], Optional[FrozenSet[Fact]]] = {
    (Action.CREATE_EVENT, Role.EMPLOYEE): _needs(Fact.OWNER),
    (Action.CREATE_EVENT, Role.PROJECT_MANAGER): None,
    (Action.CREATE_EVENT, Role.ADMIN): None,
    (Action.DECIDE_EVENT, Role.PROJECT_MANAGER): _needs(Fact.MANAGER),
    (Action.DECIDE_EVENT, Role.ADMIN): None,
    (Action.CANCEL_EVENT, Role.EMPLOYEE): _needs(Fact.OWNER),
    (Action.CANCEL_EVENT, Role.PROJECT_MANAGER): None,
    (Action.CANCEL_EVENT, Role.ADMIN): None,
    (Action.CANCEL_REMOTE_WORK, Role.EMPLOYEE): _needs(Fact.OWNER),
    (Action.CANCEL_REMOTE_WORK, Role.PROJECT_MANAGER): None,
    (Action.CANCEL_REMOTE_WORK, Role.ADMIN): None,
    (Action.CANCEL_PAID_LEAVE, Role.EMPLOYEE): _needs(Fact.OWNER),
    (Action.CANCEL_PAID_LEAVE, Role.PROJECT_MANAGER): _needs(Fact.MANAGER),
    (Action.CANCEL_PAID_LEAVE, Role.ADMIN): None,
    (Action.CREATE_ASSIGNMENT, Role.PROJECT_MANAGER): _needs(Fact.MANAGER),
    (Action.CREATE_ASSIGNMENT, Role.ADMIN): None,
    (Action.READ_ASSIGNMENT, Role.EMPLOYEE): _needs(Fact.OWNER),
    (Action.READ_ASSIGNMENT, Role.PROJECT_MANAGER): None,
    (Action.READ_ASSIGNMENT, Role.ADMIN): None,
    (Action.REMOVE_ASSIGNMENT, Role.PROJECT_MANAGER): _needs(Fact.MANAGER),
    (Action.REMOVE_ASSIGNMENT, Role.ADMIN): None,
    (Action.CREATE_PROJECT, Role.ADMIN): None,
    (Action.READ_PROJECT, Role.EMPLOYEE): _needs(Fact.ASSIGNED),
    (Action.READ_PROJECT, Role.PROJECT_MANAGER): None,
    (Action.READ_PROJECT, Role.ADMIN): None,
    (Action.UPDATE_PROJECT, Role.PROJECT_MANAGER): _needs(Fact.MANAGER),
    (Action.UPDATE_PROJECT, Role.ADMIN): None,
    (Action.ARCHIVE_PROJECT, Role.ADMIN): None,
    (Action.REFER_PROJECT, Role.PROJECT_MANAGER): None,
    (Action.REFER_PROJECT, Role.ADMIN): None,
    (Action.READ_MEAL_VOUCHERS, Role.EMPLOYEE): _needs(Fact.OWNER),
    (Action.READ_MEAL_VOUCHERS, Role.PROJECT_MANAGER): None,
    (Action.READ_MEAL_VOUCHERS, Role.ADMIN): None,
}


def role_may(action: Action, role: Role) -> bool:
    """True when the role can perform the action under some circumstances."""
    return (action, role) in _RULES


def is_unconditional(action: Action, role: Role) -> bool:
    key = (action, role)
    return key in _RULES and _RULES[key] is None


def is_allowed(action: Action, role: Role, facts: Iterable[Fact] = ()) -> bool:
    key = (action, role)
    if key not in _RULES:
        return False
    required = _RULES[key]
    if required is None:
        return True
    return bool(required & frozenset(facts))


def ensure_role(action: Action, role: Role, message: str) -> None:
    if not role_may(action, role):
        raise AuthorizationError(message)


def ensure_allowed(action: Action, role: Role, facts: Iterable[Fact], message: str) -> None:
    if not is_allowed(action, role, facts):
        raise AuthorizationError(message)


def facts_for(*, owner: bool = False, manager: bool = False, assigned: bool = False) -> FrozenSet[Fact]:
    out = set()
    if owner:
        out.add(Fact.OWNER)
    if manager:
        out.add(Fact.MANAGER)
    if assigned:
        out.add(Fact.ASSIGNED)
    return frozenset(out)
