"""Password hashing helpers backed by bcrypt."""

import logging

import bcrypt

from .config import settings

logger = logging.getLogger(__name__)


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash ``password`` with a fresh salt.

    Parameters
    ----------
    password: str
        Plaintext password.
    rounds: int, optional
        bcrypt work factor; defaults to ``settings.bcrypt_rounds``.

    Returns
    -------
    str
        The encoded bcrypt hash, e.g. ``$2b$10$...``.
    """
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Return True if ``password`` matches the stored ``hashed`` value."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError as exc:
        logger.error("unable to verify password hash: %s", exc)
        return False
