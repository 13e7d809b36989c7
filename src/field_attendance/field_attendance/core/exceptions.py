class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "domain_error"
    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "validation_error"


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    code = "authentication_error"
    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    code = "authorization_error"
    status_code = 403


class InvalidCredentials(AuthenticationError):
    """Unknown id, wrong password and wrong role all look the same to the caller."""

    code = "invalid_credentials"


class DuplicateIdentifier(ValidationError):
    code = "duplicate_identifier"
    status_code = 409


class WrongOldPassword(ValidationError):
    code = "wrong_old_password"


class PasswordTooShort(ValidationError):
    code = "password_too_short"


class ConfirmMismatch(ValidationError):
    code = "confirm_mismatch"


class InvalidDailyCode(ValidationError):
    code = "invalid_daily_code"


class CheckinLocked(AuthorizationError):
    """Raised when a check-in is submitted without a valid pass for today."""

    code = "checkin_locked"


class IncompleteSubmission(ValidationError):
    code = "incomplete_submission"


class RecordNotFound(DomainError):
    code = "record_not_found"
    status_code = 404


class EmptyComment(ValidationError):
    code = "empty_comment"


class StoreFailure(DomainError):
    """Any failure reported by the database driver."""

    code = "store_failure"
    status_code = 503
