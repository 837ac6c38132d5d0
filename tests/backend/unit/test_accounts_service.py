"""
Unit tests for services.accounts module.
Runs against the in-memory database from the db fixture.
"""
import asyncio

import pytest

from tortoise.exceptions import OperationalError

from app.core.exceptions import ProfileDoesNotExist, ValidationError
from app.core.security import verify_password
from app.models.account import Account
from app.models.profile import Profile
from app.services import accounts


pytestmark = pytest.mark.asyncio


async def test_create_account_provisions_empty_profile(db):
    account = await accounts.create_account("jake", "jake@jake.jake", "jakejake")

    profiles = await Profile.filter(account_id=account.id)
    assert len(profiles) == 1
    assert profiles[0].bio == ""
    assert profiles[0].image == ""
    assert account.is_active is True
    assert account.is_staff is False


async def test_create_account_hashes_password(db):
    account = await accounts.create_account("jake", "jake@jake.jake", "jakejake")
    assert account.password_hash != "jakejake"
    assert verify_password("jakejake", account.password_hash)


async def test_create_account_requires_username_and_email(db):
    with pytest.raises(ValidationError):
        await accounts.create_account("", "jake@jake.jake", "jakejake")
    with pytest.raises(ValidationError):
        await accounts.create_account("jake", "", "jakejake")
    assert await Account.all().count() == 0


async def test_create_account_rejects_duplicates(db):
    await accounts.create_account("jake", "jake@jake.jake", "jakejake")

    with pytest.raises(ValidationError) as exc_info:
        await accounts.create_account("jake", "other@jake.jake", "jakejake")
    assert "username" in exc_info.value.detail

    with pytest.raises(ValidationError) as exc_info:
        await accounts.create_account("other", "jake@jake.jake", "jakejake")
    assert "email" in exc_info.value.detail

    assert await Account.all().count() == 1
    assert await Profile.all().count() == 1


async def test_failed_profile_insert_rolls_back_account(db, monkeypatch):
    async def broken_create(*args, **kwargs):
        raise OperationalError("profile insert failed")

    monkeypatch.setattr(Profile, "create", broken_create)

    with pytest.raises(OperationalError):
        await accounts.create_account("jake", "jake@jake.jake", "jakejake")
    assert await Account.filter(username="jake").count() == 0


async def test_create_superuser(db):
    admin = await accounts.create_superuser("boss", "boss@example.com", "BossPass!1")
    assert admin.is_staff is True
    assert admin.role == "admin"
    assert await Profile.filter(account_id=admin.id).exists()

    with pytest.raises(ValidationError):
        await accounts.create_superuser("boss2", "boss2@example.com", None)


async def test_authenticate(db):
    await accounts.create_account("jake", "jake@jake.jake", "jakejake")

    account = await accounts.authenticate("jake@jake.jake", "jakejake")
    assert account.username == "jake"

    with pytest.raises(ValidationError):
        await accounts.authenticate("jake@jake.jake", "wrong-password")
    with pytest.raises(ValidationError):
        await accounts.authenticate("nobody@jake.jake", "jakejake")


async def test_authenticate_rejects_inactive_account(db):
    account = await accounts.create_account("jake", "jake@jake.jake", "jakejake")
    account.is_active = False
    await account.save()

    with pytest.raises(ValidationError) as exc_info:
        await accounts.authenticate("jake@jake.jake", "jakejake")
    assert exc_info.value.detail == "This user has been deactivated."


async def test_update_account_splits_account_and_profile_fields(db):
    account = await accounts.create_account("jake", "jake@jake.jake", "jakejake")

    await accounts.update_account(
        account,
        {"username": "jacob", "bio": "I work at statefarm", "image": "https://example.com/jake.png"},
    )

    stored = await Account.get(id=account.id)
    profile = await Profile.get(account_id=account.id)
    assert stored.username == "jacob"
    assert stored.email == "jake@jake.jake"
    assert profile.bio == "I work at statefarm"
    assert profile.image == "https://example.com/jake.png"


async def test_update_account_hashes_password(db):
    account = await accounts.create_account("jake", "jake@jake.jake", "jakejake")

    await accounts.update_account(account, {"password": "new-password-1"})

    stored = await Account.get(id=account.id)
    assert stored.password_hash != "new-password-1"
    assert verify_password("new-password-1", stored.password_hash)
    assert not verify_password("jakejake", stored.password_hash)


async def test_update_account_rejects_taken_email(db):
    await accounts.create_account("jake", "jake@jake.jake", "jakejake")
    other = await accounts.create_account("ann", "ann@example.com", "annannann")

    with pytest.raises(ValidationError):
        await accounts.update_account(other, {"email": "jake@jake.jake"})

    assert (await Account.get(id=other.id)).email == "ann@example.com"


async def test_concurrent_duplicate_registration_is_a_validation_error(db):
    results = await asyncio.gather(
        accounts.create_account("jake", "a@jake.jake", "jakejake"),
        accounts.create_account("jake", "b@jake.jake", "jakejake"),
        return_exceptions=True,
    )

    created = [r for r in results if isinstance(r, Account)]
    rejected = [r for r in results if isinstance(r, Exception)]
    assert len(created) == 1
    assert len(rejected) == 1
    assert isinstance(rejected[0], ValidationError)
    assert rejected[0].status_code == 400
    assert "username" in rejected[0].detail
    assert await Account.filter(username="jake").count() == 1
    assert await Profile.all().count() == 1


async def test_unique_violation_on_create_maps_to_field(db, monkeypatch):
    await accounts.create_account("jake", "jake@jake.jake", "jakejake")

    async def skip_check(*args, **kwargs):
        return None

    monkeypatch.setattr(accounts, "_ensure_unique", skip_check)

    with pytest.raises(ValidationError) as exc_info:
        await accounts.create_account("other", "jake@jake.jake", "jakejake")
    assert "email" in exc_info.value.detail
    assert await Account.all().count() == 1


async def test_unique_violation_on_update_maps_to_field(db, monkeypatch):
    await accounts.create_account("jake", "jake@jake.jake", "jakejake")
    other = await accounts.create_account("ann", "ann@example.com", "annannann")

    async def skip_check(*args, **kwargs):
        return None

    monkeypatch.setattr(accounts, "_ensure_unique", skip_check)

    with pytest.raises(ValidationError) as exc_info:
        await accounts.update_account(other, {"username": "jake"})
    assert "username" in exc_info.value.detail
    assert (await Account.get(id=other.id)).username == "ann"


async def test_update_account_does_not_provision_profiles(db):
    account = await accounts.create_account("jake", "jake@jake.jake", "jakejake")
    await accounts.update_account(account, {"bio": "hello"})
    await accounts.update_account(account, {"email": "jake2@jake.jake"})
    assert await Profile.filter(account_id=account.id).count() == 1


async def test_get_profile(db):
    await accounts.create_account("jake", "jake@jake.jake", "jakejake")

    profile = await accounts.get_profile("jake")
    assert profile.account.username == "jake"

    with pytest.raises(ProfileDoesNotExist):
        await accounts.get_profile("nobody")


async def test_get_profile_hides_inactive_account(db):
    account = await accounts.create_account("jake", "jake@jake.jake", "jakejake")
    account.is_active = False
    await account.save()

    with pytest.raises(ProfileDoesNotExist):
        await accounts.get_profile("jake")
    # soft delete keeps the data
    assert await Profile.filter(account_id=account.id).exists()


async def test_deleting_account_removes_profile(db):
    account = await accounts.create_account("jake", "jake@jake.jake", "jakejake")
    await account.delete()
    assert await Profile.all().count() == 0


async def test_image_url_fallback(db):
    from app.config import settings

    account = await accounts.create_account("jake", "jake@jake.jake", "jakejake")
    profile = await Profile.get(account_id=account.id)
    assert profile.image_url == settings.DEFAULT_PROFILE_IMAGE

    profile.image = "https://example.com/me.png"
    assert profile.image_url == "https://example.com/me.png"
