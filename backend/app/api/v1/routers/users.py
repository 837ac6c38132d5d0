# app/api/v1/routers/users.py
from fastapi import APIRouter, Depends, status

from app.api.v1.deps import get_current_account
from app.core.renderers import decode_token, render
from app.models.account import Account
from app.models.profile import Profile
from app.schemas.auth import AccountUpdateRequest, LoginRequest, RegistrationRequest
from app.services import accounts

router = APIRouter(tags=["users"])

USER_LABEL = "user"
USER_TRANSFORMS = (decode_token,)


def _auth_to_dict(account: Account) -> dict:
    return {"email": account.email, "username": account.username, "token": account.token}


def _user_to_dict(account: Account, profile: Profile) -> dict:
    """Current-user representation; bio and image are read from the Profile."""
    return {**_auth_to_dict(account), "bio": profile.bio, "image": profile.image}


@router.post("/users")
async def register(body: RegistrationRequest):
    """
    Register a new account.

    The Account and its empty Profile are created together.

    Returns:
        201 {"user": {"email", "username", "token"}}

    Errors:
        400 {"errors": ...} when the payload is invalid or the username/email is taken
    """
    data = body.user
    account = await accounts.create_account(data.username, data.email, data.password)
    return render(_auth_to_dict(account), USER_LABEL, USER_TRANSFORMS, status_code=status.HTTP_201_CREATED)


@router.post("/users/login")
async def login(body: LoginRequest):
    """
    Exchange email and password for an access token.

    The token is returned in the body and also set as an HttpOnly cookie
    for browser-based clients.
    """
    account = await accounts.authenticate(body.user.email, body.user.password)
    payload = decode_token(_auth_to_dict(account))
    response = render(payload, USER_LABEL)
    response.set_cookie("accessToken", payload["token"], httponly=True, secure=False, samesite="lax")
    return response


@router.get("/user")
async def retrieve_current_user(account: Account = Depends(get_current_account)):
    profile = await accounts.get_account_profile(account)
    return render(_user_to_dict(account, profile), USER_LABEL, USER_TRANSFORMS)


@router.put("/user")
@router.patch("/user")
async def update_current_user(
    body: AccountUpdateRequest,
    account: Account = Depends(get_current_account),
):
    """
    Update the current account and its profile in one request.

    Every field absent from the request keeps its stored value. A password,
    if given, is hashed before it is saved.
    """
    profile = await accounts.get_account_profile(account)
    user_data = body.user.model_dump(exclude_unset=True)

    changes = {
        "username": user_data.get("username", account.username),
        "email": user_data.get("email", account.email),
        "bio": user_data.get("bio", profile.bio),
        "image": user_data.get("image", profile.image),
    }
    if user_data.get("password") is not None:
        changes["password"] = user_data["password"]

    account = await accounts.update_account(account, changes)
    profile = await accounts.get_account_profile(account)
    return render(_user_to_dict(account, profile), USER_LABEL, USER_TRANSFORMS)
