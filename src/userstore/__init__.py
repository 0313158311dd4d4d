"""Fail-soft storage for user credentials."""

from .repository import CreateResult, UpdateResult, UserRepository, logged_changes

__all__ = ["CreateResult", "UpdateResult", "UserRepository", "logged_changes"]
