from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: credentials live with the account service, not here.
    """

    user_id: int
    username: str
    email: str
    role: Role
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Actor:
    """Who is calling: supplied by the identity context on every request."""

    user_id: int
    role: Role

    def is_(self, user_id: int) -> bool:
        return int(self.user_id) == int(user_id)
