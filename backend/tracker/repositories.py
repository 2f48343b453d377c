"""Repository classes encapsulating database operations.

Each repository is small and focused on a single table. Contact and
application repositories share the user-scoped CRUD in
`UserOwnedRepository`; subclasses only name the model and list order.
Repositories return SQLModel objects and commit where appropriate.
"""

from typing import Any, Dict, List, Optional
from sqlmodel import Session, select
from . import models


class UserRepository:
    """CRUD operations for `User` objects."""
    def __init__(self, session: Session):
        self.session = session

    def create(self, user: models.User) -> models.User:
        """Persist a new user and return the managed instance."""
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def get_by_email(self, email: str) -> Optional[models.User]:
        """Return a `User` by email or `None` if not found."""
        stmt = select(models.User).where(models.User.email == email)
        return self.session.exec(stmt).first()

    def get(self, user_id: int) -> Optional[models.User]:
        """Get a `User` by primary key."""
        return self.session.get(models.User, user_id)

    def set_password(self, user: models.User, password_hash: str) -> models.User:
        user.password = password_hash
        self.session.add(user)
        self.session.commit()
        return user


class UserOwnedRepository:
    """List/create/replace/delete for rows owned through `user_id`."""
    model: Any = None

    def __init__(self, session: Session):
        self.session = session

    def ordering(self):
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> List[Any]:
        """Return every row of `user_id` in the repository's list order."""
        stmt = select(self.model).where(self.model.user_id == user_id).order_by(*self.ordering())
        return self.session.exec(stmt).all()

    def get(self, row_id: int, user_id: Optional[int] = None):
        """Fetch a row by id, optionally only if `user_id` owns it."""
        row = self.session.get(self.model, row_id)
        if row is None or (user_id is not None and row.user_id != user_id):
            return None
        return row

    def create(self, row):
        self.session.add(row)
        self.session.commit()
        self.session.refresh(row)
        return row

    def replace(self, row_id: int, values: Dict[str, Any], user_id: Optional[int] = None) -> int:
        """Overwrite the given columns of one row.

        Returns the number of rows changed (0 when the id is unknown or
        owned by someone else).
        """
        row = self.get(row_id, user_id)
        if row is None:
            return 0
        for key, value in values.items():
            setattr(row, key, value)
        self.session.add(row)
        self.session.commit()
        return 1

    def delete(self, row_id: int, user_id: Optional[int] = None) -> int:
        """Delete one row and return how many were removed (0 or 1)."""
        row = self.get(row_id, user_id)
        if row is None:
            return 0
        self.session.delete(row)
        self.session.commit()
        return 1


class PhdContactRepository(UserOwnedRepository):
    """PhD contacts, newest first."""
    model = models.PhdContact

    def ordering(self):
        return (models.PhdContact.created_at.desc(), models.PhdContact.id.desc())


class MastersAppRepository(UserOwnedRepository):
    """Masters applications, soonest deadline first."""
    model = models.MastersApp

    def ordering(self):
        return (models.MastersApp.end_date.asc(), models.MastersApp.id.asc())
