"""FastAPI dependencies: settings, store access and the authenticated caller.

Tokens are issued elsewhere; this module only verifies them. The
``Authorization`` header carries the JWT, with or without a ``Bearer``
prefix, and its payload must hold ``id`` and ``role``.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

import jwt
from fastapi import Depends, Header, Request

from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.bootstrap import build_unit_of_work_factory
from storefront.infrastructure.config import Settings

log = logging.getLogger(__name__)

_store_guard = threading.Lock()


class NotAuthenticated(Exception):
    """The caller has no valid token, or the wrong role for the route."""


@dataclass(frozen=True)
class Principal:
    user_id: str
    role: str


def app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_unit_of_work(request: Request) -> Callable[[], UnitOfWork]:
    """Return the store's unit-of-work factory, opening the store on first use."""
    state = request.app.state
    with _store_guard:
        if state.unit_of_work is None:
            state.unit_of_work = build_unit_of_work_factory(state.settings)
    return state.unit_of_work


def verify_token(token: str, settings: Settings) -> Principal:
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.PyJWTError as exc:
        log.info(f"Rejected token: {exc}")
        raise NotAuthenticated("Invalid or expired token.") from exc

    user_id = payload.get("id")
    if not user_id:
        raise NotAuthenticated("Invalid or expired token.")
    return Principal(user_id=str(user_id), role=str(payload.get("role", "user")))


def current_user(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(app_settings),
) -> Principal:
    if not authorization:
        raise NotAuthenticated("Access denied. No token provided.")
    token = authorization.strip()
    if token.lower().startswith("bearer "):
        token = token.split(" ", 1)[1].strip()
    return verify_token(token, settings)


def current_seller(principal: Principal = Depends(current_user)) -> Principal:
    if principal.role != "seller":
        raise NotAuthenticated("Access denied. Only sellers are allowed in this route.")
    return principal


def current_staff(principal: Principal = Depends(current_user)) -> Principal:
    """Sellers and admins may move orders through fulfilment."""
    if principal.role not in ("seller", "admin"):
        raise NotAuthenticated("Access denied. Only sellers and admins are allowed in this route.")
    return principal
