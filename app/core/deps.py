"""
FastAPI dependencies for authentication and authorization.

These dependencies are used to protect endpoints and extract user context.
Two tiers exist: any logged-in user, and admins (isAdmin) who may create,
change and delete companies and jobs.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session
from typing import Optional

from app.core.database import get_db
from app.core.exceptions import NotFoundError
from app.core.security import decode_token
from app.crud import user as user_crud

# HTTP Bearer token scheme (Authorization: Bearer <token>)
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> dict:
    """
    Extract and validate the current user from the JWT token.

    This dependency:
    1. Extracts the Bearer token from Authorization header
    2. Decodes and validates the JWT
    3. Fetches the user from the database

    Raises:
        HTTPException 401: If the token is missing or invalid, or the user is gone
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    try:
        payload = decode_token(credentials.credentials)
        username: str = payload.get("sub")
        if username is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    try:
        return user_crud.get(db, username)
    except NotFoundError:
        raise credentials_exception


async def get_admin_user(user: dict = Depends(get_current_user)) -> dict:
    """
    Get the current user and ensure they are an admin.

    Raises:
        HTTPException 401: If the user is not an admin
    """
    if not user["isAdmin"]:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Admin privileges required"
        )

    return user
