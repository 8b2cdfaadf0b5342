"""User as seen by the ordering core: just enough to snapshot the buyer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UserRole(Enum):
    USER = "USER"
    ADMIN = "ADMIN"


@dataclass
class User:
    id: str
    name: str
    email: str
    role: UserRole = UserRole.USER
