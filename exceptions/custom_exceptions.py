"""
Custom Exception Classes for the Club Training API

Provides a hierarchy of exceptions for consistent error responses.
All custom exceptions inherit from ClubAPIException which carries a status code and details.
"""

import uuid
from datetime import datetime
from typing import Any


class ClubAPIException(Exception):
    """Base exception for all API errors"""

    def __init__(self, message: str, status_code: int = 500, details: dict[Any, Any] | None = None):
        """
        Args:
            message: Human-readable error message
            status_code: HTTP status code for the error
            details: Additional context as a dictionary
        """
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidArgumentError(ClubAPIException):
    """Raised when an assembler is handed a missing instance, list or page"""

    def __init__(self, argument: str, message: str = "", details: dict[Any, Any] | None = None):
        """
        Args:
            argument: Name of the offending argument
            message: Description of the violated precondition
            details: Additional context

        Example:
            raise InvalidArgumentError('page', 'Page must not be None')
        """
        full_message = message or f"Argument '{argument}' must not be None"
        extra_details = {"argument": argument}
        if details:
            extra_details.update(details)
        super().__init__(full_message, status_code=500, details=extra_details)


class InvalidResourceReferenceError(ClubAPIException):
    """Raised when a link cannot be built because the resource has no identifier"""

    def __init__(self, resource_type: str, details: dict[Any, Any] | None = None):
        message = f"Cannot build a link to a '{resource_type}' resource without an identifier"
        extra_details = {"resource_type": resource_type}
        if details:
            extra_details.update(details)
        super().__init__(message, status_code=500, details=extra_details)


class AssemblyConfigurationError(ClubAPIException):
    """Raised at startup when assembler embedding declarations form a cycle"""

    def __init__(self, message: str, details: dict[Any, Any] | None = None):
        super().__init__(message, status_code=500, details=details)


class ResourceNotFoundException(ClubAPIException):
    """Raised when a requested resource doesn't exist"""

    def __init__(
        self, resource_type: str, resource_id: str = "", details: dict[Any, Any] | None = None
    ):
        """
        Args:
            resource_type: Type of resource (e.g., 'Hall', 'Team', 'Coach')
            resource_id: ID of the missing resource
            details: Additional context

        Example:
            raise ResourceNotFoundException('Hall', hall_id)
        """
        message = f"{resource_type} with resource ID '{resource_id}' not found"
        extra_details = {"resource_type": resource_type, "resource_id": resource_id}
        if details:
            extra_details.update(details)
        super().__init__(message, status_code=404, details=extra_details)


class ResourceConflictException(ClubAPIException):
    """Raised when a resource with the same identity already exists"""

    def __init__(self, resource_type: str, message: str, details: dict[Any, Any] | None = None):
        full_message = f"{resource_type} already exists: {message}"
        extra_details = {"resource_type": resource_type}
        if details:
            extra_details.update(details)
        super().__init__(full_message, status_code=409, details=extra_details)


class ValidationException(ClubAPIException):
    """Raised when input validation fails"""

    def __init__(self, field: str, message: str, details: dict[Any, Any] | None = None):
        """
        Args:
            field: Name of the field that failed validation
            message: Description of the validation error
            details: Additional context

        Example:
            raise ValidationException('page', 'Page number must not be negative')
        """
        full_message = f"Validation error on field '{field}': {message}"
        extra_details = {"field": field}
        if details:
            extra_details.update(details)
        super().__init__(full_message, status_code=400, details=extra_details)


class DatabaseOperationException(ClubAPIException):
    """Raised when database operations fail"""

    def __init__(
        self,
        operation: str,
        message: str = "",
        collection: str = "",
        details: dict[Any, Any] | None = None,
    ):
        """
        Args:
            operation: Type of operation (e.g., 'insert', 'update', 'delete', 'find')
            message: Description of the database error
            collection: Name of the collection
            details: Additional context (e.g., query, error message)
        """
        self.operation = operation
        self.collection = collection
        self.correlation_id = str(uuid.uuid4())
        self.timestamp = datetime.utcnow().isoformat()

        error_message = message or f"Database operation '{operation}' failed"
        if collection and not message:
            error_message += f" on collection '{collection}'"

        super().__init__(error_message, status_code=500, details=details)


class AuthenticationException(ClubAPIException):
    """Raised when authentication fails"""

    def __init__(
        self, message: str = "Authentication failed", details: dict[Any, Any] | None = None
    ):
        super().__init__(message, status_code=401, details=details)


class AuthorizationException(ClubAPIException):
    """Raised when user lacks permission for an action"""

    def __init__(
        self, message: str = "Insufficient permissions", details: dict[Any, Any] | None = None
    ):
        """
        Args:
            message: Description of the authorization error
            details: Additional context (e.g., required role, user role)

        Example:
            raise AuthorizationException('Admin role required', {'required_role': 'ADMIN'})
        """
        super().__init__(message, status_code=403, details=details)


class ExternalServiceException(ClubAPIException):
    """Raised when external service calls fail"""

    def __init__(self, service_name: str, message: str, details: dict[Any, Any] | None = None):
        """
        Args:
            service_name: Name of the external service
            message: Description of the error
            details: Additional context (e.g., status code, response)

        Example:
            raise ExternalServiceException('FACEBOOK_GRAPH_API', 'Failed to fetch posts', {'status_code': 500})
        """
        full_message = f"External service '{service_name}' error: {message}"
        extra_details = {"service_name": service_name}
        if details:
            extra_details.update(details)
        super().__init__(full_message, status_code=502, details=extra_details)
