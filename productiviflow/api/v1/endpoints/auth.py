"""Authentication API endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from productiviflow.api.deps import get_db
from productiviflow.schemas import Token, UserCreate, UserLogin, UserRead
from productiviflow.services.auth import AuthService
from productiviflow.services.users import UserService


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(payload: UserCreate, db: Session = Depends(get_db)) -> UserRead:
    """Register a new user and return the created entity."""

    return AuthService(db).register_user(payload)


@router.post("/login", response_model=Token)
def login(payload: UserLogin, db: Session = Depends(get_db)) -> Token:
    """Authenticate, advance the login streak and return JWT tokens."""

    service = AuthService(db)
    user = service.authenticate_user(payload.email, payload.password)
    UserService(db).record_login(user)
    return service.create_tokens(user)
