"""
Employee API — Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for the outcomes a request can have
       besides success.
How:   Each exception carries a message and optional context dict. Global
       exception handlers (registered in main.py) turn them into responses.
Who:   StorageError is raised by the gateway; the rest by route handlers.

Exception Hierarchy:
    EmployeeAPIError (base)
    ├── ValidationError       → 400 {"error": message}
    ├── NotFoundError         → 404 empty body (row does not exist)
    └── StorageError          → 500 {"error": "internal server error"}
                                (create/update handlers convert it to
                                 ValidationError first, so it answers 400)
"""

from typing import Any, Dict, Optional


class EmployeeAPIError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Human-readable error description
        context:  Additional debug info (logged, never returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(EmployeeAPIError):
    """
    Raised when a request body cannot be applied.

    When:    Malformed JSON, wrong field types, or a write the store rejected
             (NOT NULL violation, empty update).
    HTTP:    400 Bad Request, message returned verbatim.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(EmployeeAPIError):
    """
    Raised when the addressed employee row does not exist.

    The gateway reports a missing row as None or a zero affected count;
    handlers convert that into this exception.
    HTTP:    404 Not Found with an empty body.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StorageError(EmployeeAPIError):
    """
    Raised by EmployeeGateway when a statement fails.

    What:    Constraint violations, type errors, lost connections, or a
             statement that cannot be built.
    Message: The underlying driver message, unmodified.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(message=message, context=ctx)
        self.operation = operation
