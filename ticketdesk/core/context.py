# ticketdesk/core/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from fastapi import Response

from ticketdesk.core.errors import Unauthenticated

if TYPE_CHECKING:
    from ticketdesk.auth.models import User

REVALIDATE_HEADER = "X-Revalidate"


@dataclass
class RequestContext:
    """Per-request state handed to every handler: who is calling, and which views went stale."""

    user: User | None = None
    revalidated: list[str] = field(default_factory=list)

    def require_user(self) -> User:
        if self.user is None:
            raise Unauthenticated()
        return self.user

    def revalidate(self, path: str) -> None:
        if path not in self.revalidated:
            self.revalidated.append(path)

    def apply(self, response: Response) -> None:
        if self.revalidated:
            response.headers[REVALIDATE_HEADER] = ", ".join(self.revalidated)
