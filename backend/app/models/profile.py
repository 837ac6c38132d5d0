# app/models/profile.py
"""
Database model for profiles.
Holds user-facing display data for exactly one Account.
"""
from tortoise import fields

from app.config import settings
from app.models.base import TimestampedModel


class Profile(TimestampedModel):
    """
    Profile database model.

    Relationships:
    - Belongs to exactly one Account (one-to-one); cascade delete, so removing
      the Account removes the Profile

    Profiles are provisioned by the accounts service together with their
    Account and are never created or deleted on their own.
    """
    account = fields.OneToOneField(
        "models.Account",
        related_name="profile",
        on_delete=fields.CASCADE,
    )
    bio = fields.TextField(default="")  # Free text, may be empty
    image = fields.CharField(max_length=1024, default="")  # Image URL, may be empty

    class Meta:
        table = "profiles"
        ordering = ["-created_at", "-updated_at"]

    @property
    def image_url(self) -> str:
        """Stored image, or the configured fallback when none was set."""
        return self.image or settings.DEFAULT_PROFILE_IMAGE
