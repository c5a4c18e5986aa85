"""Domain exceptions raised by the services and mapped to HTTP responses."""


class EMSException(Exception):
    """Base exception for the employee management API"""

    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500):
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(message)


class BadRequestError(EMSException):
    """Invariant violation that is not a uniqueness clash"""
    def __init__(self, message: str):
        super().__init__(message, "BAD_REQUEST", 400)


class UnauthorizedError(EMSException):
    """Missing or invalid credentials"""
    def __init__(self, message: str):
        super().__init__(message, "UNAUTHORIZED", 401)


class ForbiddenError(EMSException):
    """Authenticated, but the role may not perform the operation"""
    def __init__(self, message: str):
        super().__init__(message, "FORBIDDEN", 403)


class NotFoundError(EMSException):
    """Referenced entity does not exist"""
    def __init__(self, message: str):
        super().__init__(message, "NOT_FOUND", 404)


class ConflictError(EMSException):
    """Uniqueness violation (company name, email)"""
    def __init__(self, message: str):
        super().__init__(message, "CONFLICT", 409)
