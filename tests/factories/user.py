"""User factories for test data generation."""

from polyfactory import Use

from src.projecthub.core.security import hash_password
from src.projecthub.models import User, UserRole
from tests.factories.base import BaseFactory, generate_uuid, utc_now

# Default test password - stored for convenience in tests
DEFAULT_TEST_PASSWORD = "correct-horse-battery-staple-42"

_DEFAULT_HASH = hash_password(DEFAULT_TEST_PASSWORD)


class UserFactory(BaseFactory):
    """Factory for generating User test data. Builds students by default."""

    __model__ = User

    id = Use(generate_uuid)
    email = Use(lambda: f"user_{generate_uuid().hex[-8:]}@example.com")
    hashed_password = _DEFAULT_HASH
    full_name = "Test Student"
    role = UserRole.USER.value
    is_active = True
    department = None
    specialization = None
    notification_preferences = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)
    deleted_at = None

    @classmethod
    def teacher(cls, **kwargs):
        """Create a teacher (valid supervisor)."""
        return cls.build(
            role=UserRole.TEACHER.value,
            full_name=kwargs.pop("full_name", "Test Teacher"),
            **kwargs,
        )

    @classmethod
    def admin(cls, **kwargs):
        """Create an admin."""
        return cls.build(
            role=UserRole.ADMIN.value,
            full_name=kwargs.pop("full_name", "Test Admin"),
            **kwargs,
        )

    @classmethod
    def inactive(cls, **kwargs):
        """Create an inactive user."""
        return cls.build(is_active=False, **kwargs)
