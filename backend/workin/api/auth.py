from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from workin.auth import create_access_token, get_current_user, hash_password, verify_password
from workin.database import commit, get_db
from workin.errors import AuthenticationFailed, Conflict, InvalidPayload, NotFound, Unauthorized, parse_identifier
from workin.logging_config import get_logger
from workin.models.user import USER_ROLES, User
from workin.schemas.auth import AuthResponse, LoginRequest, MeResponse, SignupRequest, UserProfileOut
from workin.schemas.common import MessageResponse


router = APIRouter()
logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 6


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(payload: SignupRequest, db: Session = Depends(get_db)) -> AuthResponse:
    name = payload.name.strip()
    email = payload.email.strip().lower()
    phone_number = payload.phone_number.strip()
    if not name or not email or not phone_number or not payload.password or not payload.confirm_password:
        raise InvalidPayload("All fields are required!")
    if "@" not in email:
        raise InvalidPayload("Invalid email address")
    if payload.password != payload.confirm_password:
        raise InvalidPayload("Passwords do not match!")
    if len(payload.password) < MIN_PASSWORD_LENGTH:
        raise InvalidPayload(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    role = (payload.role or "candidate").strip().lower()
    if role not in USER_ROLES:
        raise InvalidPayload("Invalid role")

    existing = db.query(User).filter(User.email == email).first()
    if existing:
        raise Conflict("User already exists!")

    user = User(
        name=name,
        email=email,
        phone_number=phone_number,
        password_hash=hash_password(payload.password),
        role=role,
    )
    db.add(user)
    commit(db, conflict_message="Email already exists!")
    db.refresh(user)
    logger.info("Registered user %s with role %s", user.id, user.role)

    return AuthResponse(
        message="User created successfully!",
        token=create_access_token(user.id),
        name=user.name,
        role=user.role,
    )


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> AuthResponse:
    email = payload.email.strip().lower()
    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(payload.password, user.password_hash):
        logger.info("Rejected login for %s", email)
        raise AuthenticationFailed("Invalid credentials!")
    if not user.is_active:
        raise Unauthorized("Account disabled")

    return AuthResponse(
        message="Login successful!",
        token=create_access_token(user.id),
        name=user.name,
        role=user.role,
    )


@router.get("/me", response_model=MeResponse)
def me(current_user: User = Depends(get_current_user)) -> MeResponse:
    return MeResponse(
        id=current_user.id,
        name=current_user.name,
        email=current_user.email,
        phone_number=current_user.phone_number,
        role=current_user.role,
    )


@router.post("/logout", response_model=MessageResponse)
def logout(current_user: User = Depends(get_current_user)) -> MessageResponse:
    # Tokens are stateless; the client discards its copy.
    logger.info("User %s logged out", current_user.id)
    return MessageResponse(message="Logged out successfully")


@router.get("/users/{user_id}", response_model=UserProfileOut)
def get_user(user_id: str, db: Session = Depends(get_db)) -> User:
    user_id_num = parse_identifier(user_id, "user")
    user = db.get(User, user_id_num)
    if not user:
        raise NotFound("User not found!")
    return user
