"""FastAPI application entrypoint and HTTP controllers.

This module builds the tracker API. Controllers are intentionally thin:
they accept requests, delegate to services, and return JSON responses.
Failures are rendered as `{"error": <message>}`.

Endpoints implemented:
- POST /api/auth/register
- POST /api/auth/login
- GET|POST /api/phd-contacts, PUT|DELETE /api/phd-contacts/{id}
- GET|POST /api/masters-apps, PUT|DELETE /api/masters-apps/{id}
- GET /health
"""

from contextlib import asynccontextmanager
from typing import Optional
import json
import logging
import time
import uuid

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from sqlmodel import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import services
from .config import Settings
from .database import build_engine, create_db_and_tables, dispose_engine, get_session
from .schemas import (
    CreatedOut,
    DeletedOut,
    LoginIn,
    MastersAppCreate,
    MastersAppFields,
    PhdContactCreate,
    PhdContactFields,
    RegisterIn,
    UpdatedOut,
    UserEnvelope,
    UserOut,
)
from .security import build_password_context

logger = logging.getLogger("tracker.api")

router = APIRouter(prefix="/api")


def _user_envelope(user) -> UserEnvelope:
    return UserEnvelope(user=UserOut(id=user.id, name=user.name, email=user.email))


def get_auth_service(request: Request, db: Session = Depends(get_session)) -> services.AuthService:
    return services.AuthService(db, request.app.state.pwd_ctx)


@router.post('/auth/register', response_model=UserEnvelope)
def register(payload: RegisterIn, auth: services.AuthService = Depends(get_auth_service)):
    """Register a new user.

    A second registration with the same email fails with
    "Email already exists" and leaves the first account unchanged.
    """
    user = auth.register(payload.name, payload.email, payload.password, payload.phone)
    return _user_envelope(user)


@router.post('/auth/login', response_model=UserEnvelope)
def login(payload: LoginIn, auth: services.AuthService = Depends(get_auth_service)):
    """Check credentials and return the user's public fields.

    No token is issued; clients keep the returned id and send it as
    `user_id` on later requests.
    """
    user = auth.login(payload.email, payload.password)
    return _user_envelope(user)


@router.get('/phd-contacts')
def list_phd_contacts(user_id: Optional[int] = None, db: Session = Depends(get_session)):
    """Return the user's PhD contacts, most recently created first."""
    return services.PhdContactService(db).list(user_id)


@router.post('/phd-contacts', response_model=CreatedOut)
def create_phd_contact(payload: PhdContactCreate, db: Session = Depends(get_session)):
    row = services.PhdContactService(db).create(payload)
    return {'id': row.id}


@router.put('/phd-contacts/{contact_id}', response_model=UpdatedOut)
def update_phd_contact(contact_id: int, payload: PhdContactFields, user_id: Optional[int] = None,
                       db: Session = Depends(get_session)):
    """Replace every editable field of a contact.

    Unknown ids are not an error. With `user_id`, only that user's row
    is changed.
    """
    services.PhdContactService(db).update(contact_id, payload, user_id=user_id)
    return {'updated': True}


@router.delete('/phd-contacts/{contact_id}', response_model=DeletedOut)
def delete_phd_contact(contact_id: int, user_id: Optional[int] = None, db: Session = Depends(get_session)):
    services.PhdContactService(db).delete(contact_id, user_id=user_id)
    return {'deleted': True}


@router.get('/masters-apps')
def list_masters_apps(user_id: Optional[int] = None, db: Session = Depends(get_session)):
    """Return the user's Masters applications, soonest deadline first."""
    return services.MastersAppService(db).list(user_id)


@router.post('/masters-apps', response_model=CreatedOut)
def create_masters_app(payload: MastersAppCreate, db: Session = Depends(get_session)):
    row = services.MastersAppService(db).create(payload)
    return {'id': row.id}


@router.put('/masters-apps/{app_id}', response_model=UpdatedOut)
def update_masters_app(app_id: int, payload: MastersAppFields, user_id: Optional[int] = None,
                       db: Session = Depends(get_session)):
    services.MastersAppService(db).update(app_id, payload, user_id=user_id)
    return {'updated': True}


@router.delete('/masters-apps/{app_id}', response_model=DeletedOut)
def delete_masters_app(app_id: int, user_id: Optional[int] = None, db: Session = Depends(get_session)):
    services.MastersAppService(db).delete(app_id, user_id=user_id)
    return {'deleted': True}


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


def _install_error_handlers(app: FastAPI, settings: Settings):
    def status_for(code: int) -> int:
        return 200 if settings.LEGACY_ERROR_STATUS else code

    @app.exception_handler(services.TrackerError)
    async def tracker_error_handler(request: Request, exc: services.TrackerError):
        return JSONResponse({"error": exc.message}, status_code=status_for(exc.status_code))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse({"error": _validation_message(exc)}, status_code=status_for(422))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers)


def _install_request_logging(app: FastAPI):
    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        req_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = req_id
        started = time.perf_counter()
        response: Response
        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
            logger.exception(
                "request_failed %s",
                json.dumps(
                    {
                        "request_id": req_id,
                        "path": request.url.path,
                        "method": request.method,
                        "duration_ms": elapsed_ms,
                    },
                    ensure_ascii=True,
                ),
            )
            raise
        response.headers["X-Request-ID"] = req_id
        if request.url.path.startswith("/api"):
            elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
            logger.info(
                "request_done %s",
                json.dumps(
                    {
                        "request_id": req_id,
                        "path": request.url.path,
                        "method": request.method,
                        "status_code": response.status_code,
                        "duration_ms": elapsed_ms,
                    },
                    ensure_ascii=True,
                ),
            )
        return response


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the tracker application.

    The lifespan opens the engine, creates missing tables and disposes
    the engine on shutdown, so each app instance owns its store.
    """
    settings = settings or Settings()
    if not logging.getLogger().handlers:
        logging.basicConfig(level=settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = build_engine(settings)
        create_db_and_tables(engine)
        app.state.engine = engine
        try:
            yield
        finally:
            dispose_engine(engine)

    app = FastAPI(title="Graduate Application Tracker API", lifespan=lifespan)
    app.state.settings = settings
    app.state.pwd_ctx = build_password_context(settings.PASSWORD_SCHEME)

    # Wide-open CORS keeps a locally opened frontend working in dev.
    if settings.ALLOW_DEV_CORS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    _install_request_logging(app)
    _install_error_handlers(app, settings)
    app.include_router(router)

    @app.get("/health")
    def health():
        """Lightweight health check for uptime monitoring."""
        return {"status": "ok"}

    # Mounted last so API routes take precedence over static files.
    if settings.STATIC_DIR.exists():
        app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")
    return app
