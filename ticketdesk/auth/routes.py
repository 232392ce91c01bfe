# ticketdesk/auth/routes.py
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ticketdesk.auth import services as auth_service
from ticketdesk.auth.dependencies import get_context, get_hasher, get_tokens
from ticketdesk.auth.passwords import PasswordHasher
from ticketdesk.auth.schemas import LoginIn, RegisterIn, UserOut
from ticketdesk.auth.tokens import TokenService
from ticketdesk.core.context import RequestContext
from ticketdesk.core.database import get_db

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=UserOut, status_code=201)
def register(
    payload: RegisterIn,
    response: Response,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
    tokens: TokenService = Depends(get_tokens),
):
    user = auth_service.register(db, hasher, payload)
    tokens.set_cookie(response, tokens.issue(user.id))
    return user


@router.post("/login", response_model=UserOut)
def login(
    payload: LoginIn,
    response: Response,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
    tokens: TokenService = Depends(get_tokens),
):
    user = auth_service.login(db, hasher, payload)
    tokens.set_cookie(response, tokens.issue(user.id))
    return user


@router.post("/logout", status_code=204)
def logout(response: Response, tokens: TokenService = Depends(get_tokens)):
    tokens.clear_cookie(response)


@router.get("/me", response_model=UserOut)
def me(ctx: RequestContext = Depends(get_context)):
    return ctx.require_user()
