# ticketdesk/auth/services.py
from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ticketdesk.auth.models import User
from ticketdesk.auth.passwords import PasswordHasher
from ticketdesk.auth.schemas import LoginIn, RegisterIn
from ticketdesk.auth.tokens import TokenError, TokenService
from ticketdesk.core.errors import DuplicateEmail, InvalidCredentials
from ticketdesk.core.telemetry import add_breadcrumb


def get_user(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalars(select(User).where(User.email == email.lower())).first()


def register(db: Session, hasher: PasswordHasher, payload: RegisterIn) -> User:
    if get_user_by_email(db, payload.email) is not None:
        add_breadcrumb("auth", "Registration with a taken email", level="warning")
        raise DuplicateEmail()

    user = User(email=payload.email, password_hash=hasher.hash(payload.password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        # Lost a race with another registration for the same address
        db.rollback()
        add_breadcrumb("auth", "Registration hit the unique email constraint", level="warning")
        raise DuplicateEmail() from exc
    db.refresh(user)

    logger.info("Registered user id={user_id}", user_id=user.id)
    add_breadcrumb("auth", "User registered", data={"user_id": user.id})
    return user


def login(db: Session, hasher: PasswordHasher, payload: LoginIn) -> User:
    user = get_user_by_email(db, payload.email)
    # Unknown emails still pay for a bcrypt check so timing does not reveal accounts
    stored_hash = user.password_hash if user is not None else hasher.dummy_hash
    if not hasher.verify(payload.password, stored_hash) or user is None:
        add_breadcrumb("auth", "Login rejected", level="warning")
        raise InvalidCredentials()

    add_breadcrumb("auth", "User logged in", data={"user_id": user.id})
    return user


def resolve_current_user(db: Session, tokens: TokenService, token: str | None) -> User | None:
    if not token:
        return None

    try:
        claims = tokens.verify(token)
    except TokenError as exc:
        add_breadcrumb("auth", "Session token rejected", level="warning", data={"reason": type(exc).__name__})
        return None

    user = get_user(db, claims.user_id)
    if user is None:
        add_breadcrumb("auth", "Session token for a missing user", level="warning", data={"user_id": claims.user_id})
    return user
