"""Account creation, sign-in, and bearer-token resolution."""
import hmac
import logging
from datetime import datetime, timedelta
from typing import Optional, Tuple

from google.auth import exceptions as google_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import Settings
from ..core.exceptions import (
    AccountDisabled, DuplicateAccount, FederatedAuthFailed, InvalidAdminSecret,
    InvalidCredentials, InvalidOrExpiredToken, PrincipalNotFound
)
from ..core.principal import ADMIN, USER, AdminPrincipal, Principal, UserPrincipal
from ..core.security import (
    create_access_token, decode_access_token, get_password_hash, unusable_password, verify_password
)
from ..models.user import Admin, User

logger = logging.getLogger(__name__)


def verify_google_id_token(token: str, audience: str) -> dict:
    """Check a Google ID token against Google's signing keys; returns its claims."""
    return id_token.verify_oauth2_token(token, google_requests.Request(), audience)


class AuthService:
    def __init__(self, settings: Settings):
        self.settings = settings

    # Sign up
    def signup_user(self, db: Session, email: str, password: str) -> User:
        return self._create_account(db, User, email, password)

    def signup_admin(self, db: Session, email: str, password: str) -> Admin:
        return self._create_account(db, Admin, email, password)

    def _create_account(self, db: Session, model, email: str, password: str):
        if db.query(model).filter(model.email == email).first():
            raise DuplicateAccount(f"{model.__name__} with this email already exists.")

        account = model(
            email=email,
            password_hash=get_password_hash(password, self.settings.password_hash_iterations),
        )
        db.add(account)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise DuplicateAccount(f"{model.__name__} with this email already exists.")
        db.refresh(account)
        logger.info("Created %s account %s", model.__name__.lower(), account.id)
        return account

    # Sign in
    def signin_user(self, db: Session, email: str, password: str) -> Tuple[str, User]:
        user = db.query(User).filter(User.email == email).first()
        if not user or not verify_password(password, user.password_hash):
            logger.warning("Failed user sign in")
            raise InvalidCredentials()
        if not user.is_active:
            raise AccountDisabled()
        return self.issue_token(UserPrincipal(user)), user

    def signin_admin(self, db: Session, email: str, password: str, admin_key: str) -> Tuple[str, Admin]:
        # The shared key is checked before any account lookup.
        if not hmac.compare_digest(admin_key.encode("utf-8"), self.settings.super_admin_key.encode("utf-8")):
            logger.warning("Admin sign in rejected: wrong admin key")
            raise InvalidAdminSecret()

        admin = db.query(Admin).filter(Admin.email == email).first()
        if not admin:
            raise InvalidCredentials("Admin account not found. Please create an admin account first.")
        if not verify_password(password, admin.password_hash):
            logger.warning("Failed admin sign in")
            raise InvalidCredentials()
        return self.issue_token(AdminPrincipal(admin)), admin

    def federated_signin(self, db: Session, token: str) -> Tuple[str, User, Optional[str]]:
        """Exchange a Google ID token for an application token, provisioning the user on first use."""
        if not self.settings.google_client_id:
            raise FederatedAuthFailed("Google sign-in is not configured.")
        try:
            claims = verify_google_id_token(token, self.settings.google_client_id)
        except (ValueError, google_exceptions.GoogleAuthError) as e:
            logger.warning("Google ID token rejected: %s", e)
            raise FederatedAuthFailed()

        email = (claims.get("email") or "").strip().lower()
        if not email:
            raise FederatedAuthFailed("Google account has no email address.")
        name = claims.get("name")

        user = db.query(User).filter(User.email == email).first()
        if not user:
            user = User(email=email, password_hash=unusable_password(), name=name)
            db.add(user)
            try:
                db.commit()
            except IntegrityError:
                # Concurrent first sign-in for the same email; use the row that won.
                db.rollback()
                user = db.query(User).filter(User.email == email).first()
            else:
                db.refresh(user)
                logger.info("Provisioned user %s from Google sign-in", user.id)
        if not user.is_active:
            raise AccountDisabled()
        return self.issue_token(UserPrincipal(user)), user, name

    # Tokens
    def issue_token(self, principal: Principal, now: Optional[datetime] = None) -> str:
        return create_access_token(
            {"id": principal.id, "email": principal.email, "type": principal.type},
            secret_key=self.settings.secret_key,
            algorithm=self.settings.algorithm,
            expires_delta=timedelta(days=self.settings.access_token_expire_days),
            now=now,
        )

    def verify_token(self, db: Session, token: str) -> Principal:
        payload = decode_access_token(token, self.settings.secret_key, self.settings.algorithm)
        if payload is None:
            logger.warning("Token verification failed")
            raise InvalidOrExpiredToken()

        principal_id = payload.get("id")
        principal_type = payload.get("type")
        if not isinstance(principal_id, int):
            raise InvalidOrExpiredToken()

        if principal_type == ADMIN:
            admin = db.get(Admin, principal_id)
            if admin is None:
                raise PrincipalNotFound("Admin not found.")
            return AdminPrincipal(admin)
        if principal_type == USER:
            user = db.get(User, principal_id)
            if user is None:
                raise PrincipalNotFound("User not found.")
            if not user.is_active:
                raise AccountDisabled()
            return UserPrincipal(user)
        raise InvalidOrExpiredToken("Invalid token type.")
