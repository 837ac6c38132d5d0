# app/models/base.py
"""
Shared abstract base for timestamped models.
"""
import uuid
from tortoise import fields, models


class TimestampedModel(models.Model):
    """
    Abstract model carrying a UUID primary key and creation/update timestamps.

    Concrete subclasses repeat the ordering in their own Meta:
    newest first, ties broken by most recently updated.
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    created_at = fields.DatetimeField(auto_now_add=True)  # Set once on insert
    updated_at = fields.DatetimeField(auto_now=True)  # Refreshed on every save

    class Meta:
        abstract = True
        ordering = ["-created_at", "-updated_at"]
