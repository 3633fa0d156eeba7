"""Domain errors raised by services and mapped to ``{"message": ...}`` responses."""
from fastapi import status


class LabPortalError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "An unexpected server error occurred. Please try again later."

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(LabPortalError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request."


# 401
class Unauthenticated(LabPortalError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required."


class InvalidCredentials(Unauthenticated):
    default_message = "Invalid credentials."


class InvalidOrExpiredToken(Unauthenticated):
    default_message = "Invalid or expired token."


class PrincipalNotFound(Unauthenticated):
    default_message = "Account for this token no longer exists."


class FederatedAuthFailed(Unauthenticated):
    default_message = "Google authentication failed. Invalid token."


# 403
class Forbidden(LabPortalError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied."


class InvalidAdminSecret(Forbidden):
    default_message = "Invalid admin key."


class AccountDisabled(Forbidden):
    default_message = "Account is deactivated."


# 404
class NotFound(LabPortalError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found."


# 409
class Conflict(LabPortalError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict."


class DuplicateAccount(Conflict):
    default_message = "An account with this email already exists."


class HasDependents(Conflict):
    default_message = "Cannot delete a record that other records still reference."
