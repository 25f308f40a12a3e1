"""Tenant factory for test data generation."""

from polyfactory import Use

from src.app.models import Tenant, TenantStatus
from tests.factories.base import BaseFactory, unique_suffix


class TenantFactory(BaseFactory):
    """Factory for generating Tenant test data."""

    __model__ = Tenant

    name = Use(lambda: f"Test Community {unique_suffix()}")
    slug = Use(lambda: f"test-{unique_suffix()}")
    description = None
    logo_url = None
    logo_file_id = None
    category = None
    location = None
    status = TenantStatus.ACTIVE.value
    created_by_user_id = None

    @classmethod
    def suspended(cls, **kwargs):
        """Create a suspended tenant."""
        return cls.build(status=TenantStatus.SUSPENDED.value, **kwargs)
