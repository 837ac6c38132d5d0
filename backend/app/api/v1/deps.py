# app/api/v1/deps.py
from fastapi import Header, HTTPException, Request, status
from app.core.security import decode_access_token
from app.models.account import Account

# Accepted Authorization header schemes
AUTH_HEADER_PREFIXES = ("token", "bearer")

async def get_current_account(
    request: Request,
    authorization: str | None = Header(default=None),
) -> Account:
    """
    FastAPI dependency to get the current authenticated account.

    The JWT is read from either:
    1. Authorization header: "Token <jwt>" or "Bearer <jwt>"
    2. HttpOnly cookie (accessToken) - fallback method

    Raises:
        HTTPException (401): AUTH_REQUIRED, AUTH_INVALID_TOKEN,
            AUTH_USER_NOT_FOUND or AUTH_USER_INACTIVE
    """
    token = None
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() in AUTH_HEADER_PREFIXES and credentials.strip():
            token = credentials.strip()
    if not token:
        token = request.cookies.get("accessToken")

    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="AUTH_REQUIRED")

    try:
        payload = decode_access_token(token)
        account_id: str = payload.get("sub")
    except Exception:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="AUTH_INVALID_TOKEN")

    account = await Account.get_or_none(id=account_id)
    if not account:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="AUTH_USER_NOT_FOUND")
    if not account.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="AUTH_USER_INACTIVE")
    return account
