from typing import Iterable, Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from ..database import get_db
from ..services.auth_service import AuthService
from .exceptions import Forbidden, Unauthenticated
from .principal import ADMIN, USER, Principal

security = HTTPBearer(auto_error=False)


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
) -> Principal:
    """Resolve the bearer token in the Authorization header to a user or admin."""
    if not credentials or not credentials.credentials:
        raise Unauthenticated("Access token required or invalid format.")
    return auth_service.verify_token(db, credentials.credentials)


def authorize(principal: Optional[Principal], allowed_types: Iterable[str]) -> Principal:
    """Permit the principal only if its type is one of ``allowed_types``."""
    allowed = tuple(allowed_types)
    if principal is None:
        raise Unauthenticated("Authentication required.")
    if principal.type not in allowed:
        raise Forbidden(f"Access denied. {' or '.join(allowed)} access required.")
    return principal


def require_roles(*allowed_types: str):
    """Dependency factory: authenticate, then gate on principal type"""
    def role_checker(principal: Principal = Depends(get_current_principal)) -> Principal:
        return authorize(principal, allowed_types)
    return role_checker


require_admin = require_roles(ADMIN)
require_user = require_roles(USER)
require_user_or_admin = require_roles(USER, ADMIN)
