# app/models/account.py
"""
Database model for accounts.
An account governs authentication and authorization: login identifier,
password hash and access-control flags. Display data lives on Profile.
"""
from tortoise import fields

from app.core.security import create_access_token
from app.models.base import TimestampedModel


class Account(TimestampedModel):
    """
    Account database model.

    Relationships:
    - Has exactly one Profile (reverse one-to-one, via related_name="profile")

    Security:
    - Password is stored as a hash (never store plain text passwords)
    - Username and email must be unique across all accounts
    - is_active=False hides the account without deleting its data
    """
    username = fields.CharField(max_length=255, unique=True, index=True)  # Public identifier used in profile URLs
    email = fields.CharField(max_length=255, unique=True, index=True)  # Login identifier
    password_hash = fields.CharField(max_length=255)
    is_active = fields.BooleanField(default=True)  # Soft delete flag
    is_staff = fields.BooleanField(default=False)  # Administrative flag

    class Meta:
        table = "accounts"
        ordering = ["-created_at", "-updated_at"]

    def __str__(self) -> str:
        return self.email

    @property
    def role(self) -> str:
        return "admin" if self.is_staff else "user"

    @property
    def token(self) -> str:
        """A freshly signed access token for this account."""
        return create_access_token(str(self.id), self.role)
