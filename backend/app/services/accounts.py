# app/services/accounts.py
"""
Account and profile operations.

Account creation always provisions the Profile in the same transaction, so
the one-Profile-per-Account rule holds without any post-save hook.
"""
import logging
from collections.abc import Mapping
from typing import Any

from tortoise.exceptions import IntegrityError
from tortoise.transactions import in_transaction

from app.core.exceptions import ProfileDoesNotExist, ValidationError
from app.core.security import hash_password, verify_password
from app.models.account import Account
from app.models.profile import Profile

logger = logging.getLogger("uvicorn.error")

ACCOUNT_FIELDS = ("username", "email")
PROFILE_FIELDS = ("bio", "image")


async def _ensure_unique(field: str, value: str, exclude_id=None) -> None:
    qs = Account.filter(**{field: value})
    if exclude_id is not None:
        qs = qs.exclude(id=exclude_id)
    if await qs.exists():
        raise ValidationError({field: [f"account with this {field} already exists."]})


def _conflict_error(exc: IntegrityError) -> ValidationError:
    """Map a unique-constraint violation raised by the database to the field it hit."""
    message = str(exc).lower()
    for field in ACCOUNT_FIELDS:
        if field in message:
            return ValidationError({field: [f"account with this {field} already exists."]})
    return ValidationError("An account with these details already exists.")


async def create_account(
    username: str,
    email: str,
    password: str,
    is_staff: bool = False,
) -> Account:
    """
    Create an Account together with its empty Profile.

    Both rows are written in one transaction: if the Profile insert fails the
    Account insert is rolled back.

    Raises:
        ValidationError: username/email missing or already taken
    """
    if not username:
        raise ValidationError({"username": ["Users must have a username."]})
    if not email:
        raise ValidationError({"email": ["Users must have an email address."]})

    await _ensure_unique("username", username)
    await _ensure_unique("email", email)

    # A concurrent request can still take the name between check and insert
    try:
        async with in_transaction() as conn:
            account = await Account.create(
                username=username,
                email=email,
                password_hash=hash_password(password),
                is_staff=is_staff,
                using_db=conn,
            )
            await Profile.create(account=account, bio="", image="", using_db=conn)
    except IntegrityError as exc:
        raise _conflict_error(exc) from exc

    logger.info("[accounts] created account id=%s username=%s staff=%s",
                account.id, account.username, account.is_staff)
    return account


async def create_superuser(username: str, email: str, password: str | None) -> Account:
    """Create an administrative account. A password is mandatory."""
    if not password:
        raise ValidationError({"password": ["Superusers must have a password."]})
    return await create_account(username, email, password, is_staff=True)


async def authenticate(email: str, password: str) -> Account:
    """
    Resolve login credentials to an active Account.

    Raises:
        ValidationError: unknown email, wrong password or deactivated account
    """
    account = await Account.get_or_none(email=email)
    if account is None or not verify_password(password, account.password_hash):
        logger.info("[accounts] failed login for email=%s", email)
        raise ValidationError("A user with this email and password was not found.")
    if not account.is_active:
        raise ValidationError("This user has been deactivated.")
    return account


async def update_account(account: Account, changes: Mapping[str, Any]) -> Account:
    """
    Apply a flat mapping of account and profile fields.

    `password` is hashed, never assigned as given. The Account is saved
    before its Profile.

    Raises:
        ValidationError: new username/email already used by another account
    """
    changes = dict(changes)
    requested = sorted(key for key, value in changes.items() if value is not None)
    profile_changes = {key: changes.pop(key) for key in PROFILE_FIELDS if key in changes}
    password = changes.pop("password", None)

    for field in ACCOUNT_FIELDS:
        value = changes.get(field)
        if value is not None and value != getattr(account, field):
            await _ensure_unique(field, value, exclude_id=account.id)
            setattr(account, field, value)

    if password is not None:
        account.password_hash = hash_password(password)

    try:
        async with in_transaction() as conn:
            await account.save(using_db=conn)

            profile = await Profile.filter(account_id=account.id).using_db(conn).get()
            for field, value in profile_changes.items():
                if value is not None:
                    setattr(profile, field, value)
            await profile.save(using_db=conn)
    except IntegrityError as exc:
        raise _conflict_error(exc) from exc

    logger.info("[accounts] updated account id=%s fields=%s", account.id, requested)
    return account


async def get_account_profile(account: Account) -> Profile:
    return await Profile.get(account_id=account.id)


async def get_profile(username: str) -> Profile:
    """
    Return the Profile of the active account named `username`.

    Raises:
        ProfileDoesNotExist: no such account, or it has been deactivated
    """
    profile = await (
        Profile.filter(account__username=username, account__is_active=True)
        .select_related("account")
        .first()
    )
    if profile is None:
        raise ProfileDoesNotExist()
    return profile
