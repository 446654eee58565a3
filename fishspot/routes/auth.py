"""
auth.py — Identity routes.

Routes:
  POST /auth/register  — create new account
  POST /auth/login     — exchange credentials for JWT
  GET  /auth/me        — return current user (requires valid JWT)

The moderation core only needs {user id, account created_at} from here;
CurrentUser is the dependency the other routes use to get it.

Register runs the same display name / email / password validators as the
signup form and returns their message as the 422 detail.

All errors use HTTPException so FastAPI serialises them as:
  { "detail": "..." }
"""

from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from fishspot.core.clock import to_instant
from fishspot.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from fishspot.core.store import USERS, DocumentStore
from fishspot.models.user import LoginRequest, Token, UserCreate, UserOut
from fishspot.routes.deps import get_clock, get_store
from fishspot.services.content_validator import (
    validate_display_name,
    validate_email,
    validate_password,
)

router = APIRouter(prefix="/auth", tags=["auth"])

# Reusable bearer extractor (does NOT auto-raise on missing token)
_bearer = HTTPBearer(auto_error=False)
CredDep = Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)]


# ── Helpers ───────────────────────────────────────────────────────────────────

def _doc_to_user_out(doc: dict) -> UserOut:
    return UserOut(
        id=str(doc["_id"]),
        email=doc["email"],
        display_name=doc.get("display_name", ""),
        role=doc.get("role", "user"),
        is_banned=doc.get("is_banned", False),
        created_at=to_instant(doc.get("created_at")) or datetime.now(tz=timezone.utc),
    )


async def _get_current_user(
    credentials: CredDep,
    store: DocumentStore = Depends(get_store),
) -> UserOut:
    """
    Resolve the Bearer token to a user document.

    Raises 401 if the token is missing, invalid, or the user no longer exists.
    """
    cred_error = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if not credentials:
        raise cred_error

    user_id = decode_access_token(credentials.credentials)
    if not user_id:
        raise cred_error

    doc = await store.get(USERS, user_id)
    if not doc:
        raise cred_error

    return _doc_to_user_out(doc)


# Re-export so other routes can depend on it
CurrentUser = Annotated[UserOut, Depends(_get_current_user)]


# ── Routes ────────────────────────────────────────────────────────────────────

@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
async def register(
    payload: UserCreate,
    store: DocumentStore = Depends(get_store),
    clock=Depends(get_clock),
):
    """Register a new user and return a JWT."""
    for result in (
        validate_display_name(payload.display_name),
        validate_email(payload.email),
        validate_password(payload.password),
    ):
        if not result.valid:
            raise HTTPException(status_code=422, detail=result.error)

    email = payload.email.strip().lower()
    if await store.find_by(USERS, limit=1, email=email):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="An account with this email already exists",
        )

    user_doc = {
        "email": email,
        "display_name": payload.display_name.strip(),
        "hashed_password": hash_password(payload.password),
        "role": "user",
        "is_banned": False,
        "created_at": clock(),
    }
    user_doc["_id"] = await store.insert(USERS, user_doc)

    user_out = _doc_to_user_out(user_doc)
    return Token(access_token=create_access_token(user_out.id), user=user_out)


@router.post("/login", response_model=Token)
async def login(payload: LoginRequest, store: DocumentStore = Depends(get_store)):
    """Authenticate with email + password and return a JWT."""
    cred_err = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Incorrect email or password",
        headers={"WWW-Authenticate": "Bearer"},
    )

    matches = await store.find_by(USERS, limit=1, email=payload.email.strip().lower())
    if not matches or not verify_password(payload.password, matches[0]["hashed_password"]):
        raise cred_err

    user_out = _doc_to_user_out(matches[0])
    return Token(access_token=create_access_token(user_out.id), user=user_out)


@router.get("/me", response_model=UserOut)
async def me(current_user: CurrentUser):
    """Return the currently authenticated user's profile."""
    return current_user
