"""
Business logic for user accounts.

Accounts exist so that a submitted listing has an owner.  Passwords are
stored as PBKDF2 hashes (see ``core.security``).
"""

import logging
import sqlite3
from typing import Optional

from pride_directory_api.app.core.db import get_connection
from pride_directory_api.app.core.security import hash_password, verify_password
from pride_directory_api.app.schemas.user import UserCreate, UserRead

logger = logging.getLogger(__name__)


class UserService:
    """Registration and credential checks backed by the ``users`` table."""

    @classmethod
    async def create_user(cls, data: UserCreate) -> UserRead:
        """Create a new user and return it.

        Raises ``ValueError`` if the e‑mail is already registered.
        """
        logger.info("Registering user %s", data.email)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    "INSERT INTO users (email, full_name, password) VALUES (?, ?, ?)",
                    (data.email, data.full_name, hash_password(data.password)),
                )
            except sqlite3.IntegrityError as e:
                conn.rollback()
                raise ValueError(f"User {data.email} already exists") from e
            user_id = cursor.lastrowid
            conn.commit()
            return UserRead(id=user_id, email=data.email, full_name=data.full_name, disabled=False)
        finally:
            conn.close()

    @classmethod
    async def authenticate(cls, email: str, password: str) -> Optional[UserRead]:
        """Return the user if the credentials match an enabled account, else ``None``."""
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT id, email, full_name, password, disabled FROM users WHERE email = ?",
                (email.strip().lower(),),
            ).fetchone()
        finally:
            conn.close()
        if not row or row["disabled"] or not verify_password(password, row["password"] or ""):
            return None
        return UserRead(
            id=row["id"],
            email=row["email"],
            full_name=row["full_name"],
            disabled=False,
        )

    @classmethod
    async def get_user_by_id(cls, user_id: int) -> Optional[UserRead]:
        """Retrieve a user by ID."""
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT id, email, full_name, disabled FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()
        finally:
            conn.close()
        if not row:
            return None
        return UserRead(
            id=row["id"],
            email=row["email"],
            full_name=row["full_name"],
            disabled=bool(row["disabled"]),
        )
