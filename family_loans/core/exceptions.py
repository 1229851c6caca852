class FamilyLoansException(Exception):
    """Base exception for family loans"""

    pass


class UnauthorizedException(FamilyLoansException):
    """Raised when a request has no valid session"""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class InvalidCredentialsException(FamilyLoansException):
    """
    Raised when login fails.

    Same message for unknown family name and wrong password so the
    response can't be used to probe which family names exist.
    """

    def __init__(self, message: str = "Invalid family name or password"):
        super().__init__(message)


class NotFoundException(FamilyLoansException):
    """Raised when resource not found or belongs to another tenant"""

    pass


class ValidationException(FamilyLoansException):
    """Raised for business logic validation errors"""

    pass


class DuplicateTenantException(ValidationException):
    """Raised when registering a family name that is already taken"""

    def __init__(self, message: str = "Family name already exists"):
        super().__init__(message)


class SessionException(FamilyLoansException):
    """Raised when the session store fails"""

    pass
