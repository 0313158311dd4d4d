"""Fail-soft data access for stored users.

Every coroutine on :class:`UserRepository` issues a single statement and
converts any exception into its normal return shape, so callers inspect the
returned value instead of catching errors.
"""

import logging
from typing import Any, Dict, List, Mapping, NamedTuple, Optional

from prometheus_client import Counter
from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import async_sessionmaker

from .clauses import build_criteria, build_values
from .config import settings
from .database import get_db
from .models.user import User
from .security import hash_password

logger = logging.getLogger(__name__)

SENSITIVE_FIELDS = ("password",)

USER_CREATED_COUNTER = Counter(
    "user_records_created_total", "Total user records created"
)
USER_DELETED_COUNTER = Counter(
    "user_records_deleted_total", "Total user records deleted"
)
REPOSITORY_ERROR_COUNTER = Counter(
    "user_repository_errors_total",
    "Total failed user repository operations",
    ["operation"],
)


class CreateResult(NamedTuple):
    user: Optional[User]
    error: Optional[str]


class UpdateResult(NamedTuple):
    success: bool
    error: Optional[str]


def logged_changes(
    updates: Mapping[str, Any], prev: Mapping[str, Any] | None = None
) -> Dict[str, str]:
    """Describe changed fields as ``"old => new"`` strings.

    Sensitive fields are never included, whether or not they changed.
    """
    prev = prev or {}
    changes = {}
    for key, value in updates.items():
        if key in SENSITIVE_FIELDS:
            continue
        old = prev.get(key)
        if value != old:
            changes[key] = f"{old} => {value}"
    return changes


def _record_failure(operation: str, exc: Exception) -> str:
    REPOSITORY_ERROR_COUNTER.labels(operation=operation).inc()
    logger.error("user %s failed: %s", operation, exc)
    return str(exc)


class UserRepository:
    """CRUD access to the ``users`` table."""

    def __init__(self, session_factory: async_sessionmaker | None = None) -> None:
        self.session_factory = session_factory

    async def create(
        self, username: str, password: str, role: str | None = None
    ) -> CreateResult:
        """Insert a user with a hashed password.

        Returns
        -------
        CreateResult
            ``(user, None)`` on success, ``(None, message)`` on failure.
        """
        try:
            user = User(
                username=username,
                password=hash_password(password),
                role=role or settings.default_role,
            )
            async with get_db(self.session_factory) as session:
                session.add(user)
                await session.commit()
                await session.refresh(user)
        except Exception as exc:
            return CreateResult(None, _record_failure("create", exc))

        USER_CREATED_COUNTER.inc()
        logger.info("created user id=%s username=%s", user.id, user.username)
        return CreateResult(user, None)

    async def update(
        self, user_id: Any, updates: Mapping[str, Any] | None = None
    ) -> UpdateResult:
        """Apply ``updates`` to the user with ``user_id``.

        A ``password`` shorter than ``settings.min_password_length`` is
        dropped from the update rather than rejected. Matching no row still
        counts as success.
        """
        try:
            data = dict(updates or {})
            if (
                "password" in data
                and len(data["password"]) >= settings.min_password_length
            ):
                data["password"] = hash_password(data["password"])
            else:
                data.pop("password", None)

            user_id = int(user_id)
            values = build_values(User, data)
            if not values:
                return UpdateResult(True, None)

            async with get_db(self.session_factory) as session:
                await session.execute(
                    update(User).where(User.id == user_id).values(**values)
                )
                await session.commit()
        except Exception as exc:
            return UpdateResult(False, _record_failure("update", exc))

        logger.info("updated user id=%s fields=%s", user_id, sorted(values))
        return UpdateResult(True, None)

    async def get(self, clause: Mapping[str, Any] | None = None) -> Optional[User]:
        """Return the first user matching ``clause`` or None."""
        try:
            async with get_db(self.session_factory) as session:
                result = await session.execute(
                    select(User)
                    .where(*build_criteria(User, clause))
                    .order_by(User.id)
                    .limit(1)
                )
                return result.scalars().first()
        except Exception as exc:
            _record_failure("get", exc)
            return None

    async def count(self, clause: Mapping[str, Any] | None = None) -> int:
        try:
            async with get_db(self.session_factory) as session:
                result = await session.execute(
                    select(func.count())
                    .select_from(User)
                    .where(*build_criteria(User, clause))
                )
                return result.scalar_one()
        except Exception as exc:
            _record_failure("count", exc)
            return 0

    async def delete(self, clause: Mapping[str, Any] | None = None) -> bool:
        """Delete every user matching ``clause``.

        An empty clause deletes all users. Returns False only when the
        statement itself fails.
        """
        try:
            async with get_db(self.session_factory) as session:
                result = await session.execute(
                    delete(User).where(*build_criteria(User, clause))
                )
                deleted = result.rowcount
                await session.commit()
        except Exception as exc:
            _record_failure("delete", exc)
            return False

        if deleted:
            USER_DELETED_COUNTER.inc(deleted)
        logger.info("deleted %s user(s)", deleted)
        return True

    async def where(
        self, clause: Mapping[str, Any] | None = None, limit: int | None = None
    ) -> List[User]:
        """Return users matching ``clause``, at most ``limit`` of them."""
        try:
            query = (
                select(User).where(*build_criteria(User, clause)).order_by(User.id)
            )
            if limit is not None:
                query = query.limit(limit)
            async with get_db(self.session_factory) as session:
                result = await session.execute(query)
                return list(result.scalars().all())
        except Exception as exc:
            _record_failure("where", exc)
            return []

    logged_changes = staticmethod(logged_changes)
