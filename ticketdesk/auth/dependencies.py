# ticketdesk/auth/dependencies.py
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ticketdesk.auth.passwords import PasswordHasher
from ticketdesk.auth.services import resolve_current_user
from ticketdesk.auth.tokens import TokenService
from ticketdesk.core.context import RequestContext
from ticketdesk.core.database import get_db


def get_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


def get_tokens(request: Request) -> TokenService:
    return request.app.state.tokens


def get_context(
    request: Request,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_tokens),
) -> RequestContext:
    user = resolve_current_user(db, tokens, tokens.get_cookie(request))
    return RequestContext(user=user)
