# app/api/v1/routers/profiles.py
from fastapi import APIRouter

from app.core.renderers import render
from app.models.profile import Profile
from app.services import accounts

router = APIRouter(prefix="/profiles", tags=["profiles"])

PROFILE_LABEL = "profile"


def _profile_to_dict(profile: Profile) -> dict:
    return {
        "username": profile.account.username,
        "bio": profile.bio,
        "image": profile.image_url,
    }


@router.get("/{username}")
async def retrieve_profile(username: str):
    """
    Public profile of an active account; no authentication required.

    Errors:
        400 {"errors": {"detail": "The requested profile does not exist."}}
    """
    profile = await accounts.get_profile(username)
    return render(_profile_to_dict(profile), PROFILE_LABEL)
