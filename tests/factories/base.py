"""Shared polyfactory bases for the community platform models.

Ids and timestamps come from the same helpers the models use, so built rows
look exactly like rows the app would write.
"""

from uuid import uuid7

from polyfactory import Use
from polyfactory.factories.sqlalchemy_factory import SQLAlchemyFactory

from src.app.models.base import utc_now


def unique_suffix() -> str:
    """Short random token for emails, names and slugs."""
    return uuid7().hex[-8:]


class BaseFactory(SQLAlchemyFactory):
    """Every model gets a uuid7 id and naive UTC created/updated times.

    Relationships and foreign keys are never generated; tests pass the ids
    of rows they created.
    """

    __is_base_factory__ = True
    __set_relationships__ = False
    __set_foreign_keys__ = False

    id = Use(uuid7)
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class TenantOwnedFactory(BaseFactory):
    """Rows that belong to a tenant. tenant_id must be passed to build()."""

    __is_base_factory__ = True

    tenant_id = None
