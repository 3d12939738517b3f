"""
User model for authentication.

Users log in with a username/password pair and receive a JWT; is_admin
gates the write endpoints for companies and jobs.
"""

from sqlalchemy import Column, String, Text, Boolean
from app.core.database import Base


class User(Base):
    """User account."""
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)
    password = Column(Text, nullable=False)  # bcrypt hash
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"
