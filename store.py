import logging
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from database import get_session
from models import User

logger = logging.getLogger(__name__)


class DuplicateEmailError(Exception):
    """Raised when a write would give two users the same email."""

    def __init__(self, email: str):
        super().__init__(f"User with email {email!r} already exists")
        self.email = email


class UserStore:
    """
    Typed operations over the User table, bound to one session.

    Handlers receive a store through ``get_store`` so tests can hand them one
    built on a throwaway database.
    """

    def __init__(self, session: Session):
        self.session = session

    def find_unique(self, id: Optional[int] = None, email: Optional[str] = None) -> Optional[User]:
        if id is not None:
            return self.session.get(User, id)
        if email is not None:
            return self.session.query(User).filter(User.email == email).first()
        raise ValueError("find_unique needs an id or an email")

    def find_many(self) -> List[User]:
        return self.session.query(User).all()

    def create(self, name: str, email: str, password: str) -> User:
        user = User(name=name, email=email, password=password)
        self.session.add(user)
        self._commit(email)
        self.session.refresh(user)
        logger.info(f"Created user {user.id}")
        return user

    def update(self, user: User, name: str, email: str, password: str) -> User:
        user.name = name
        user.email = email
        user.password = password
        self.session.add(user)
        self._commit(email)
        self.session.refresh(user)
        logger.info(f"Updated user {user.id}")
        return user

    def delete(self, user: User) -> None:
        user_id = user.id
        self.session.delete(user)
        self.session.commit()
        logger.info(f"Deleted user {user_id}")

    def _commit(self, email: str) -> None:
        try:
            self.session.commit()
        except IntegrityError:
            # Only email carries a unique constraint besides the primary key
            self.session.rollback()
            logger.warning(f"Unique constraint rejected email {email}")
            raise DuplicateEmailError(email)


def get_store(session: Session = Depends(get_session)) -> UserStore:
    return UserStore(session)
