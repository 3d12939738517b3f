"""
Authentication endpoints for user registration and login.

Implements JWT-based stateless authentication:
- POST /token: Authenticate and receive a JWT
- POST /register: Create new (non-admin) user account and receive a JWT
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import create_user_token
from app.crud import user as user_crud
from app.schemas.user import UserRegisterRequest, TokenRequest, TokenResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def login(
    request: TokenRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate user and return a JWT.

    The token carries the username and admin flag and is sent back as
    `Authorization: Bearer <token>`.
    """
    user = user_crud.authenticate(db, request.username, request.password)

    logger.info(f"User logged in: {user['username']} (admin: {user['isAdmin']})")
    return TokenResponse(token=create_user_token(user))


@router.post("/register", status_code=201, response_model=TokenResponse)
def register(
    request: UserRegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user account.

    Self-registered accounts are never admins. Returns a JWT for immediate login.
    """
    new_user = user_crud.register(
        db,
        username=request.username,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        is_admin=False,
    )

    logger.info(f"New user registered: {new_user['username']}")
    return TokenResponse(token=create_user_token(new_user))
