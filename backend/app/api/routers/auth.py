from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_db
from app.core.config import settings
from app.core.security import create_access_token
from app.models.user import BankUser
from app.schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserMe
from app.services.user import SignInResult, UserService

router = APIRouter(prefix="/auth", tags=["auth"])


def _to_me(user: BankUser) -> UserMe:
    return UserMe(id=user.id, username=user.user_name, email=user.email, fullName=user.full_name)


@router.post("/register", response_model=UserMe)
def register(payload: RegisterRequest, db: Session = Depends(get_db)) -> UserMe:
    user = UserService(db).register(
        user_name=payload.username,
        email=payload.email,
        password=payload.password,
        full_name=payload.fullName,
    )
    if not user:
        raise HTTPException(status_code=400, detail="Username or email already exists")
    return _to_me(user)


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, response: Response, db: Session = Depends(get_db)) -> TokenResponse:
    result, user = UserService(db).authenticate(payload.username, payload.password)
    if result == SignInResult.LOCKED_OUT:
        raise HTTPException(status_code=423, detail="Account locked out")
    if result != SignInResult.SUCCESS or user is None:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token(user.id, user.security_stamp)

    # Store JWT in HttpOnly cookie so refresh doesn't lose login state.
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        httponly=True,
        secure=bool(settings.auth_cookie_secure),
        samesite=settings.auth_cookie_samesite,
        max_age=int(settings.jwt_expire_minutes) * 60,
        path="/",
    )

    return TokenResponse(access_token=token)


@router.post("/logout")
def logout(
    response: Response,
    db: Session = Depends(get_db),
    current_user: BankUser = Depends(get_current_user),
) -> dict:
    # Invalidates every token issued so far, not just the cookie on this client.
    UserService(db).rotate_security_stamp(current_user)
    response.delete_cookie(key=settings.auth_cookie_name, path="/")
    return {"ok": True}


@router.get("/me", response_model=UserMe)
def me(current_user: BankUser = Depends(get_current_user)) -> UserMe:
    return _to_me(current_user)
