# app/core/bootstrap.py
"""
Bootstrap module for application initialization.
Handles initial setup tasks such as creating default admin account on first startup.
"""
import os
import logging
from app.models.account import Account
from app.services.accounts import create_superuser

logger = logging.getLogger("uvicorn.error")

async def ensure_default_admin() -> None:
    """
    If no staff account exists in the database, create one based on environment variables.
    Only takes effect under the following conditions:
      - Currently no account with is_staff=True
      - And ADMIN_PASSWORD is set (to avoid using default weak password)
    Environment variables:
      ADMIN_USERNAME (default: "admin")
      ADMIN_EMAIL    (default: "admin@example.com")
      ADMIN_PASSWORD (required, otherwise won't create)
    """
    if await Account.filter(is_staff=True).exists():
        return

    admin_password = os.getenv("ADMIN_PASSWORD")
    if not admin_password:
        logger.warning("[bootstrap] No admin present, but ADMIN_PASSWORD not set -> skip creating default admin.")
        return

    admin_username = os.getenv("ADMIN_USERNAME", "admin")
    admin_email = os.getenv("ADMIN_EMAIL", "admin@example.com")

    if await Account.filter(email=admin_email).exists():
        logger.warning("[bootstrap] ADMIN_EMAIL=%s already belongs to a regular account -> skip.", admin_email)
        return

    # A regular account may already use the name; pick a free one
    base_username = admin_username
    suffix = 1
    while await Account.filter(username=admin_username).exists():
        suffix += 1
        admin_username = f"{base_username}{suffix}"

    account = await create_superuser(admin_username, admin_email, admin_password)
    logger.warning("[bootstrap] Created default admin -> username=%s email=%s id=%s",
                   account.username, account.email, account.id)
