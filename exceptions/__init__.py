# Exceptions package
from .custom_exceptions import (
    AssemblyConfigurationError,
    AuthenticationException,
    AuthorizationException,
    ClubAPIException,
    DatabaseOperationException,
    ExternalServiceException,
    InvalidArgumentError,
    InvalidResourceReferenceError,
    ResourceConflictException,
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    'ClubAPIException',
    'InvalidArgumentError',
    'InvalidResourceReferenceError',
    'AssemblyConfigurationError',
    'ResourceNotFoundException',
    'ResourceConflictException',
    'ValidationException',
    'DatabaseOperationException',
    'AuthenticationException',
    'AuthorizationException',
    'ExternalServiceException'
]
