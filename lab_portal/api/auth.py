from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from ..database import get_db
from ..schemas.user import AdminCredentials, AdminResponse, Credentials, GoogleToken, UserResponse, UserSummary
from ..core.permissions import get_auth_service, get_current_principal
from ..core.principal import AdminPrincipal, Principal, UserPrincipal
from ..services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["authentication"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
def signup(
    credentials: Credentials,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Register a user account; the caller signs in separately"""
    user = auth_service.signup_user(db, credentials.email, credentials.password)
    return {
        "message": "User registered successfully.",
        "user": UserResponse.model_validate(user),
    }


@router.post("/admin/signup", status_code=status.HTTP_201_CREATED)
def admin_signup(
    credentials: Credentials,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Register an admin account"""
    admin = auth_service.signup_admin(db, credentials.email, credentials.password)
    return {
        "message": "Admin account registered successfully. Please sign in.",
        "admin": AdminResponse.model_validate(admin),
    }


@router.post("/signin")
def signin(
    credentials: Credentials,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service)
):
    token, user = auth_service.signin_user(db, credentials.email, credentials.password)
    return {
        "message": "User sign in successful.",
        "token": token,
        "user": UserSummary.model_validate(user),
    }


@router.post("/admin/signin")
def admin_signin(
    credentials: AdminCredentials,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service)
):
    token, admin = auth_service.signin_admin(
        db, credentials.email, credentials.password, credentials.admin_key
    )
    return {
        "message": "Admin sign in successful.",
        "token": token,
        "admin": AdminResponse.model_validate(admin),
    }


@router.post("/google-verify-token")
def google_verify_token(
    body: GoogleToken,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Exchange a Google ID token for an application token"""
    token, user, name = auth_service.federated_signin(db, body.token)
    summary = UserSummary.model_validate(user)
    if name and not summary.name:
        summary.name = name
    return {
        "message": "Google sign in successful.",
        "token": token,
        "user": summary,
    }


@router.get("/me")
def get_current_principal_info(principal: Principal = Depends(get_current_principal)):
    """Get the signed-in user or admin"""
    if isinstance(principal, AdminPrincipal):
        return {"admin": AdminResponse.model_validate(principal.admin), "type": principal.type}
    if isinstance(principal, UserPrincipal):
        return {"user": UserResponse.model_validate(principal.user), "type": principal.type}
    raise TypeError(f"Unhandled principal {principal!r}")


@router.post("/logout")
def logout():
    """Tokens are stateless; the client discards its copy"""
    return {"message": "Logout successful."}
