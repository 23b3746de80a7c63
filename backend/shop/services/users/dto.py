"""Commands and read model for user accounts."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

# Field-level patch over ``name``, ``email``, ``roles`` and ``password``
UpdateUser = Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class NewUser:
    """
    Input contract for creating a user.

    :param password: Plain text password; hashed before storage.
    :param roles: Role names, ``ADMIN`` and/or ``USER``.
    """

    name: str
    email: str
    password: str
    roles: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class UserInfo:
    """
    Output contract for a user. Password material is never included.
    """

    id: str
    name: str
    email: str
    roles: list[str]
    date_created: datetime
    date_updated: datetime
