"""
Signup, login and logout for the JSON API.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response, status

from household_inventory.api.dependencies import get_account_service, get_current_account_id
from household_inventory.api.responses import default_error_responses
from household_inventory.core.config import settings
from household_inventory.core.security import create_access_token
from household_inventory.schemas.accounts import AccountCreate, AccountResponse, LoginRequest, Token
from household_inventory.services.accounts import AccountService

router = APIRouter()


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        secure=settings.ENVIRONMENT == "production",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        path="/",
    )


@router.post(
    "/signup",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    responses=default_error_responses,
)
async def signup(
    account_in: AccountCreate,
    accounts: AccountService = Depends(get_account_service),
) -> Any:
    """Register a new account."""
    return await accounts.create_account(account_in)


@router.post("/login", response_model=Token, summary="Start a session", responses=default_error_responses)
async def login(
    credentials: LoginRequest,
    response: Response,
    accounts: AccountService = Depends(get_account_service),
) -> Any:
    """
    Check the credentials, set the session cookie and return the token for
    clients that prefer the Authorization header.
    """
    account = await accounts.authenticate(credentials.email, credentials.password)
    if not account:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = create_access_token(account.id)
    set_session_cookie(response, token)
    return Token(access_token=token)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT, summary="End the session")
async def logout() -> Response:
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")
    return response


@router.get("/me", response_model=AccountResponse, summary="Current account", responses=default_error_responses)
async def read_current_account(
    account_id: int = Depends(get_current_account_id),
    accounts: AccountService = Depends(get_account_service),
) -> Any:
    account = await accounts.get_account(account_id)
    if not account:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return account
