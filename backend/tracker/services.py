"""Business logic services used by HTTP controllers.

Services are intentionally thin: they apply defaults, call repositories
and translate storage failures into the tracker's error types so the
HTTP layer can render them as `{"error": ...}` bodies.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from passlib.context import CryptContext
from pydantic import BaseModel
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlmodel import Session

from . import models, repositories
from .security import build_password_context

logger = logging.getLogger("tracker.services")


class TrackerError(Exception):
    """Base error carrying the message and HTTP status shown to clients."""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DuplicateEmailError(TrackerError):
    status_code = 409


class InvalidCredentialsError(TrackerError):
    status_code = 401


class ConstraintError(TrackerError):
    """A statement violated a table constraint or column bound (e.g. NOT NULL)."""
    status_code = 400


class StorageError(TrackerError):
    """The database could not be reached or failed the statement."""
    status_code = 503


def _engine_message(exc: SQLAlchemyError) -> str:
    # the DBAPI error carries the engine's own wording
    return str(getattr(exc, "orig", None) or exc)


@contextmanager
def storage_errors(session: Session):
    """Roll back and re-raise SQLAlchemy failures as tracker errors."""
    try:
        yield
    except (IntegrityError, DataError) as exc:
        session.rollback()
        raise ConstraintError(_engine_message(exc)) from exc
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("storage failure: %s", _engine_message(exc))
        raise StorageError(_engine_message(exc)) from exc


class AuthService:
    """Authentication related operations (register + login)."""
    def __init__(self, session: Session, pwd_ctx: Optional[CryptContext] = None):
        self.session = session
        self.pwd_ctx = pwd_ctx or build_password_context()
        self.user_repo = repositories.UserRepository(session)

    def register(self, name: str, email: str, password: str, phone: Optional[str] = None) -> models.User:
        """Create a new user with a hashed password.

        Raises `DuplicateEmailError` when the email is already taken; the
        existing account is left untouched.
        """
        with storage_errors(self.session):
            existing = self.user_repo.get_by_email(email)
        if existing:
            raise DuplicateEmailError("Email already exists")
        user = models.User(name=name, email=email, password=self.pwd_ctx.hash(password), phone=phone)
        try:
            with storage_errors(self.session):
                return self.user_repo.create(user)
        except ConstraintError as exc:
            # lost a race with a concurrent registration of the same email
            raise DuplicateEmailError("Email already exists") from exc

    def login(self, email: str, password: str) -> models.User:
        """Verify credentials and return the matching user.

        Unknown emails and wrong passwords raise the same
        `InvalidCredentialsError`. Hashes using a deprecated scheme are
        replaced after a successful check.
        """
        with storage_errors(self.session):
            user = self.user_repo.get_by_email(email)
        if not user:
            raise InvalidCredentialsError("Invalid email or password")
        valid, new_hash = self.pwd_ctx.verify_and_update(password, user.password)
        if not valid:
            raise InvalidCredentialsError("Invalid email or password")
        if new_hash:
            with storage_errors(self.session):
                self.user_repo.set_password(user, new_hash)
            logger.info("upgraded password hash for user %s", user.id)
        return user


class UserOwnedService:
    """List/create/update/delete for one user-owned table.

    `defaults` are applied on create when a column is omitted or null;
    updates replace every mutable column, so omitted ones become null.
    """
    repository_cls: Any = None
    defaults: Dict[str, Any] = {}

    def __init__(self, session: Session):
        self.session = session
        self.repo = self.repository_cls(session)

    def list(self, user_id: Optional[int]) -> List[Any]:
        if user_id is None:
            return []
        with storage_errors(self.session):
            return self.repo.list_for_user(user_id)

    def create(self, payload: BaseModel):
        data = payload.model_dump()
        for key, value in self.defaults.items():
            if data.get(key) is None:
                data[key] = value
        row = self.repo.model(**data)
        with storage_errors(self.session):
            row = self.repo.create(row)
        logger.info("created %s %s for user %s", self.repo.model.__tablename__, row.id, row.user_id)
        return row

    def update(self, row_id: int, payload: BaseModel, user_id: Optional[int] = None) -> int:
        with storage_errors(self.session):
            changed = self.repo.replace(row_id, payload.model_dump(exclude={"user_id"}), user_id=user_id)
        if not changed:
            logger.debug("update of %s %s matched no row", self.repo.model.__tablename__, row_id)
        return changed

    def delete(self, row_id: int, user_id: Optional[int] = None) -> int:
        with storage_errors(self.session):
            removed = self.repo.delete(row_id, user_id=user_id)
        if not removed:
            logger.debug("delete of %s %s matched no row", self.repo.model.__tablename__, row_id)
        return removed


class PhdContactService(UserOwnedService):
    repository_cls = repositories.PhdContactRepository
    defaults = {"status": "no-reply"}


class MastersAppService(UserOwnedService):
    repository_cls = repositories.MastersAppRepository
    defaults = {"account_created": 0, "priority": "medium", "application_status": "pending"}
