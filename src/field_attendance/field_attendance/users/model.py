from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object, no DB access code. ``user_id`` is the
    organizational identifier (e.g. NIP) and never changes.
    """

    user_id: str
    name: str
    password_hash: str
    role: Role


@dataclass(frozen=True)
class ImportRow:
    user_id: str
    name: str
    role: Role = Role.MEMBER


@dataclass(frozen=True)
class ProvisionedUser:
    """A freshly created account plus the one-time password shown to the admin."""

    user: User
    password: str


@dataclass(frozen=True)
class BulkProvisionResult:
    created: list[ProvisionedUser]
    skipped: list[tuple[ImportRow, str]]

    @property
    def count(self) -> int:
        return len(self.created)
