"""Translate plain field mappings into SQLAlchemy criteria."""

from typing import Any, Dict, List, Mapping

from sqlalchemy import inspect

from .exceptions import InvalidFieldError


def _columns(model) -> Dict[str, Any]:
    return {attr.key: attr for attr in inspect(model).column_attrs}


def build_criteria(model, clause: Mapping[str, Any] | None) -> List[Any]:
    """Return equality expressions for every ``field: value`` pair in ``clause``.

    An empty or missing clause matches every row.
    """
    columns = _columns(model)
    criteria = []
    for field, value in (clause or {}).items():
        if field not in columns:
            raise InvalidFieldError(field)
        criteria.append(getattr(model, field) == value)
    return criteria


def build_values(model, updates: Mapping[str, Any] | None) -> Dict[str, Any]:
    """Validate an update mapping and return a copy safe to pass to ``values()``."""
    columns = _columns(model)
    primary_keys = {col.key for col in inspect(model).primary_key}
    values = {}
    for field, value in (updates or {}).items():
        if field not in columns:
            raise InvalidFieldError(field)
        if field in primary_keys:
            raise InvalidFieldError(field, "immutable field")
        values[field] = value
    return values
