from __future__ import annotations

import logging
import secrets
from typing import Iterable, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_non_empty
from ..core.constants import GENERATED_PASSWORD_ALPHABET, GENERATED_PASSWORD_LENGTH, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import (
    ConfirmMismatch,
    DuplicateIdentifier,
    InvalidCredentials,
    PasswordTooShort,
    StoreFailure,
    ValidationError,
    WrongOldPassword,
)
from .model import BulkProvisionResult, ImportRow, ProvisionedUser, User
from .repository import UserRepository

logger = logging.getLogger(__name__)


def generate_password(length: int = GENERATED_PASSWORD_LENGTH) -> str:
    return "".join(secrets.choice(GENERATED_PASSWORD_ALPHABET) for _ in range(length))


def _password_matches(user: User, password: str) -> bool:
    try:
        return check_password_hash(user.password_hash, password or "")
    except (TypeError, ValueError):
        # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
        return False


def parse_import_csv(text: str) -> list[ImportRow]:
    """Parse a user import file: header line, then ``id,name[,role]`` rows.

    Rows with fewer than two fields are ignored. Role is admin only when the
    third field says so; anything else becomes a member.
    """

    rows: list[ImportRow] = []
    for line in text.splitlines()[1:]:
        fields = line.split(",")
        if len(fields) < 2:
            continue
        role_s = fields[2].strip().lower() if len(fields) > 2 else ""
        rows.append(
            ImportRow(
                user_id=fields[0].strip(),
                name=fields[1].strip(),
                role=Role.ADMIN if role_s == Role.ADMIN.value else Role.MEMBER,
            )
        )
    return rows


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, user_id: str, password: str, role: Role) -> User:
        user = self._users.get_by_id((user_id or "").strip())
        if not user or user.role != role or not _password_matches(user, password):
            raise InvalidCredentials("NIP atau Password salah")
        return user


class UserService:
    """Use case: manage users (admin) and self-service password change."""

    def __init__(self, users: UserRepository, *, min_password_length: int = MIN_PASSWORD_LENGTH):
        self._users = users
        self._min_password_length = int(min_password_length)

    def provision(self, *, user_id: str, name: str, role: Role = Role.MEMBER) -> ProvisionedUser:
        user_id = require_non_empty(user_id, "NIP")
        name = require_non_empty(name, "Nama")

        if self._users.get_by_id(user_id):
            raise DuplicateIdentifier(f"NIP {user_id} sudah terdaftar")

        password = generate_password()
        user = User(
            user_id=user_id,
            name=name,
            password_hash=generate_password_hash(password),
            role=Role(role),
        )
        self._users.create_user(user)
        logger.info("user_provisioned", extra={"user_id": user_id, "role": user.role.value})
        return ProvisionedUser(user=user, password=password)

    def bulk_provision(self, rows: Iterable[ImportRow]) -> BulkProvisionResult:
        created: list[ProvisionedUser] = []
        skipped: list[tuple[ImportRow, str]] = []

        for row in rows:
            try:
                created.append(self.provision(user_id=row.user_id, name=row.name, role=row.role))
            except (DuplicateIdentifier, ValidationError, StoreFailure) as e:
                logger.warning(
                    "bulk_provision_row_skipped",
                    extra={"user_id": row.user_id, "reason": e.code},
                )
                skipped.append((row, str(e)))

        logger.info("bulk_provision_done", extra={"created_count": len(created), "skipped_count": len(skipped)})
        return BulkProvisionResult(created=created, skipped=skipped)

    def import_csv(self, text: str) -> BulkProvisionResult:
        return self.bulk_provision(parse_import_csv(text))

    def change_password(
        self,
        *,
        user_id: str,
        old_password: str,
        new_password: str,
        confirm_password: Optional[str] = None,
    ) -> None:
        user = self._users.get_by_id(user_id)
        if not user or not _password_matches(user, old_password):
            raise WrongOldPassword("Password lama salah")

        if confirm_password is not None and confirm_password != new_password:
            raise ConfirmMismatch("Konfirmasi password baru tidak cocok")

        if new_password is None or len(new_password) < self._min_password_length:
            raise PasswordTooShort(f"Password minimal {self._min_password_length} karakter")

        self._users.update_password_hash(user_id, generate_password_hash(new_password))
        logger.info("password_changed", extra={"user_id": user_id})

    def remove(self, user_id: str) -> bool:
        """Delete the account. Attendance rows keep their name snapshot."""

        removed = self._users.delete_by_id(user_id)
        logger.info("user_removed", extra={"user_id": user_id, "found": removed})
        return removed

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()
