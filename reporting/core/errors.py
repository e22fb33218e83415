"""Error taxonomy shared by the auth layer and the resource routes.

Every error carries the HTTP status it maps to and a single human-readable
message. ``reporting.main`` renders them as ``{"error": message}``.
"""


class ReportingError(Exception):
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(ReportingError):
    """Malformed or missing input."""
    status_code = 400


class ConflictError(ReportingError):
    """Duplicate registration."""
    status_code = 400


class AuthenticationError(ReportingError):
    """Bad credentials or missing bearer token."""
    status_code = 401


class AuthorizationError(ReportingError):
    """Token present but invalid or expired."""
    status_code = 403


class NotFoundError(ReportingError):
    status_code = 404


class StorageError(ReportingError):
    """Unexpected persistence failure. The message is generic on purpose."""
    status_code = 500
