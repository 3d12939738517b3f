"""
CRUD operations for users.

Only what authentication needs: registering accounts, checking
credentials and looking a user up for token-protected requests.
"""

from typing import Any, Dict
from sqlalchemy.orm import Session

from app.core.database import run_query
from app.core.exceptions import BadRequestError, NotFoundError, UnauthorizedError
from app.core.security import get_password_hash, verify_password

USER_COLUMNS = 'username, first_name AS "firstName", last_name AS "lastName", email, is_admin AS "isAdmin"'


def _as_user(row: Dict[str, Any]) -> Dict[str, Any]:
    # SQLite hands booleans back as 0/1
    row["isAdmin"] = bool(row["isAdmin"])
    return row


def register(
    db: Session,
    username: str,
    password: str,
    first_name: str,
    last_name: str,
    email: str,
    is_admin: bool = False,
) -> Dict[str, Any]:
    """
    Create a user with a bcrypt-hashed password.

    Returns:
        {username, firstName, lastName, email, isAdmin}

    Raises:
        BadRequestError: If the username is taken
    """
    duplicate = run_query(db, "SELECT username FROM users WHERE username = :p1", [username])
    if duplicate:
        raise BadRequestError(f"Duplicate username: {username}")

    rows = run_query(
        db,
        f"""INSERT INTO users (username, password, first_name, last_name, email, is_admin)
            VALUES (:p1, :p2, :p3, :p4, :p5, :p6)
            RETURNING {USER_COLUMNS}""",
        [username, get_password_hash(password), first_name, last_name, email, is_admin],
    )
    db.commit()

    return _as_user(rows[0])


def authenticate(db: Session, username: str, password: str) -> Dict[str, Any]:
    """
    Check a username/password pair.

    Raises:
        UnauthorizedError: If the user is unknown or the password is wrong
    """
    rows = run_query(
        db,
        f"SELECT {USER_COLUMNS}, password FROM users WHERE username = :p1",
        [username],
    )
    if rows:
        user = rows[0]
        hashed_password = user.pop("password")
        if verify_password(password, hashed_password):
            return _as_user(user)

    raise UnauthorizedError("Invalid username/password")


def get(db: Session, username: str) -> Dict[str, Any]:
    """
    Retrieve a user (without the password hash).

    Raises:
        NotFoundError: If the username is unknown
    """
    rows = run_query(db, f"SELECT {USER_COLUMNS} FROM users WHERE username = :p1", [username])
    if not rows:
        raise NotFoundError(f"No user: {username}")

    return _as_user(rows[0])
