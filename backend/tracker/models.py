"""SQLModel data models.

This module defines the three tables of the tracker. Contact and
application rows belong to a user through `user_id`; the foreign key
cascades on engines that enforce it (SQLite leaves it unenforced).
"""

from typing import Optional
from sqlalchemy import Numeric
from sqlmodel import SQLModel, Field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    """A registered user.

    Fields:
    - `email`: unique login name
    - `password`: passlib hash string (never store plaintext)
    """
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(index=True, nullable=False, unique=True)
    password: str
    phone: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)


class PhdContact(SQLModel, table=True):
    """One PhD professor outreach attempt and its follow-up state.

    Dates are free-form text (ISO `YYYY-MM-DD` by convention). `status`
    is an open string; the UI uses values such as `no-reply`.
    """
    __tablename__ = "phd_contacts"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    professor_name: str
    prof_degree: Optional[str] = None
    university: str
    country: str
    department: Optional[str] = None
    email: str
    research_focus: str
    prof_webpage: Optional[str] = None
    prof_google_scholar: Optional[str] = None
    faculty_page: Optional[str] = None
    email_sent_date: Optional[str] = None
    follow_up_date: str
    status: Optional[str] = Field(default="no-reply", sa_column_kwargs={"server_default": "no-reply"})
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)


class MastersApp(SQLModel, table=True):
    """One Masters program application.

    `account_created` is a 0/1 integer flag. Portal `username` and
    `password` are stored as entered.
    """
    __tablename__ = "masters_apps"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    country: str
    university: str
    major: str
    admission_fee: Optional[float] = Field(default=None, sa_type=Numeric(10, 2, asdecimal=False))
    tuition_fee: Optional[float] = Field(default=None, sa_type=Numeric(10, 2, asdecimal=False))
    gre_needed: Optional[str] = None
    language_test: Optional[str] = None
    application_route: Optional[str] = None
    start_date: Optional[str] = None
    end_date: str
    course_link: Optional[str] = None
    portal_link: Optional[str] = None
    account_created: Optional[int] = Field(default=0, sa_column_kwargs={"server_default": "0"})
    priority: Optional[str] = Field(default="medium", sa_column_kwargs={"server_default": "medium"})
    application_status: Optional[str] = Field(default="pending", sa_column_kwargs={"server_default": "pending"})
    missing_documents: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)
