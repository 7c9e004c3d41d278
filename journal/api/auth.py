"""Login endpoint issuing journal bearer tokens."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from journal.config import settings
from journal.database import get_session
from journal.errors import AuthenticationError
from journal.schemas.auth import LoginRequest, LoginResponse
from journal.services.auth import authenticate_user, create_access_token

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, session: Session = Depends(get_session)):
    try:
        user = authenticate_user(session, body.username, body.password, body.totp_code)
    except AuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    return LoginResponse(
        access_token=create_access_token(subject=user.username),
        expires_in=settings.jwt_expire_minutes * 60,
    )
