"""Pydantic request/response schemas used by the API.

Schemas keep API input/output shapes stable. Contact and application
payloads leave every column optional on purpose: required columns are
enforced by the database, and the engine's message is returned to the
client unchanged.
"""

from pydantic import BaseModel
from typing import Optional


class RegisterIn(BaseModel):
    """Payload for user registration."""
    name: str
    email: str
    password: str
    phone: Optional[str] = None


class LoginIn(BaseModel):
    """Payload for the login endpoint."""
    email: str
    password: str


class UserOut(BaseModel):
    """Public view of a user; the password hash is never included."""
    id: int
    name: str
    email: str


class UserEnvelope(BaseModel):
    user: UserOut


class PhdContactFields(BaseModel):
    """Mutable columns of a PhD contact, replaced wholesale on update."""
    professor_name: Optional[str] = None
    prof_degree: Optional[str] = None
    university: Optional[str] = None
    country: Optional[str] = None
    department: Optional[str] = None
    email: Optional[str] = None
    research_focus: Optional[str] = None
    prof_webpage: Optional[str] = None
    prof_google_scholar: Optional[str] = None
    faculty_page: Optional[str] = None
    email_sent_date: Optional[str] = None
    follow_up_date: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None


class PhdContactCreate(PhdContactFields):
    user_id: Optional[int] = None


class MastersAppFields(BaseModel):
    """Mutable columns of a Masters application, replaced wholesale on update."""
    country: Optional[str] = None
    university: Optional[str] = None
    major: Optional[str] = None
    admission_fee: Optional[float] = None
    tuition_fee: Optional[float] = None
    gre_needed: Optional[str] = None
    language_test: Optional[str] = None
    application_route: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    course_link: Optional[str] = None
    portal_link: Optional[str] = None
    account_created: Optional[int] = None
    priority: Optional[str] = None
    application_status: Optional[str] = None
    missing_documents: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    notes: Optional[str] = None


class MastersAppCreate(MastersAppFields):
    user_id: Optional[int] = None


class CreatedOut(BaseModel):
    id: int


class UpdatedOut(BaseModel):
    updated: bool = True


class DeletedOut(BaseModel):
    deleted: bool = True
