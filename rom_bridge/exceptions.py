#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""
ROM Bridge - Consolidated Exception Classes

All exception classes used by the bridge live here, so the storage layer,
the request channel and the app services share one error taxonomy.
"""

from datetime import datetime
from typing import Dict, Any, Optional


class BaseError(Exception):
    """Base class for all project-specific errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code or "ERROR"
        self.details = details or {}
        self.timestamp = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        """Converts the exception to a dictionary for structured logging."""
        return {
            'error_code': self.error_code,
            'message': str(self),
            'details': self.details,
            'timestamp': self.timestamp.isoformat()
        }


# =====================================================================================================
# Store errors
# =====================================================================================================

class StoreError(BaseError):
    """Base class for virtual filesystem errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        store_details = details or {}
        if path:
            store_details['path'] = str(path)
        super().__init__(message, error_code or "STORE_ERROR", store_details)

    @property
    def path(self) -> Optional[str]:
        return self.details.get('path')


class NotFoundError(StoreError):
    """Raised when a read or remove targets a missing entry."""

    def __init__(self, message: str, path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "NOT_FOUND", path, details)


class NotEmptyError(StoreError):
    """Raised when a directory removal is attempted on a non-empty directory."""

    def __init__(self, message: str, path: Optional[str] = None,
                 entries: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None):
        dir_details = details or {}
        if entries is not None:
            dir_details['entries'] = entries
        super().__init__(message, "NOT_EMPTY", path, dir_details)


class EntryKindError(StoreError):
    """Raised when a file operation targets a directory (or the reverse)."""

    def __init__(self, message: str, path: Optional[str] = None,
                 expected: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        kind_details = details or {}
        if expected:
            kind_details['expected'] = expected
        super().__init__(message, "ENTRY_KIND", path, kind_details)


class InvalidNameError(StoreError):
    """Raised when an entry name is not a single, plain path component."""

    def __init__(self, message: str, name: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        name_details = details or {}
        if name is not None:
            name_details['name'] = name
        super().__init__(message, "INVALID_NAME", None, name_details)


class InvalidDataError(StoreError):
    """Raised when file contents are not a bytes-like value."""

    def __init__(self, message: str, path: Optional[str] = None, received: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        data_details = details or {}
        if received is not None:
            data_details['received'] = received
        super().__init__(message, "INVALID_DATA", path, data_details)


# =====================================================================================================
# Channel and user-flow errors
# =====================================================================================================

class ChannelError(BaseError):
    """Base class for request channel errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code or "CHANNEL_ERROR", details)


class InvalidRequestError(ChannelError):
    """Raised for an unsupported (directory, direction) pair or an empty target."""

    def __init__(self, message: str, directory: Optional[str] = None,
                 direction: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        request_details = details or {}
        if directory:
            request_details['directory'] = directory
        if direction:
            request_details['direction'] = direction
        super().__init__(message, "INVALID_REQUEST", request_details)


class UserDeclinedError(BaseError):
    """A destructive action was not confirmed. Returned, never raised."""

    def __init__(self, message: str, path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        declined_details = details or {}
        if path:
            declined_details['path'] = path
        super().__init__(message, "USER_DECLINED", declined_details)


# =====================================================================================================
# Configuration -related errors
# =====================================================================================================

class ConfigurationError(BaseError):
    """Base class for configuration errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 file_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        config_details = details or {}
        if file_path:
            config_details['file_path'] = file_path
        super().__init__(message, error_code or "CONFIG_ERROR", config_details)


class ValidationError(ConfigurationError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 file_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        validation_details = details or {}
        if field_name:
            validation_details['field_name'] = field_name
        super().__init__(message, "VALIDATION_ERROR", file_path, validation_details)
