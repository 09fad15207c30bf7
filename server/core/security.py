# server/core/security.py

import logging
from dataclasses import dataclass

from passlib.context import CryptContext
from sqlalchemy.orm import Session

from core.errors import InvalidCredentials, InvalidInput
from core.store import create_user, find_user_by_username


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserIdentity:
    id: int
    username: str


class AuthService:
    """
    Registers users and checks their credentials.

    Passwords are hashed with bcrypt at a fixed work factor. A missing user
    and a wrong password fail with the same InvalidCredentials error so the
    response never reveals whether a username exists.
    """

    def __init__(self, rounds: int = 10):
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def get_password_hash(self, password: str) -> str:
        return self.pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        return self.pwd_context.verify(plain_password, hashed_password)

    def register(self, db: Session, username: str, password: str) -> int:
        if not username or not password:
            raise InvalidInput()

        hashed = self.get_password_hash(password)
        user_id = create_user(db, username, hashed)
        logger.info("Registered user %s (id=%s)", username, user_id)
        return user_id

    def login(self, db: Session, username: str, password: str) -> UserIdentity:
        if not username or not password:
            raise InvalidCredentials()

        user = find_user_by_username(db, username)
        if user is None:
            # Spend the same hashing time as a wrong password
            self.pwd_context.dummy_verify()
            raise InvalidCredentials()
        if not self.verify_password(password, user.password):
            raise InvalidCredentials()

        return UserIdentity(id=user.user_id, username=user.username)
