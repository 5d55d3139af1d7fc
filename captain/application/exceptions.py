"""
Core exceptions for the captain archive fetch layer.

This module defines a hierarchy of custom exceptions so callers can tell
fatal input problems apart from transient network and integrity failures.
"""


class CaptainError(Exception):
    """Base exception for all component-specific errors."""
    pass


# --- Configuration Errors ---

class ConfigurationError(CaptainError):
    """
    Raised for missing or malformed inputs. Never retried, since no number
    of attempts changes the input.
    """
    pass


class ChecksumNotFoundError(ConfigurationError):
    """Raised when an archive index has no entry for the requested path."""
    pass


# --- Infrastructure Errors ---

class InfrastructureError(CaptainError):
    """Base class for errors related to external systems (network, disk)."""
    pass


class NetworkError(InfrastructureError):
    """
    Raised when a mirror request fails: connection reset, name resolution,
    timeout or an HTTP error status. Transient.
    """
    pass


# --- Domain/Business Logic Errors ---

class DomainError(CaptainError):
    """Base class for errors related to content handling failures."""
    pass


class VerificationError(DomainError):
    """Raised when content is absent or its checksum does not match. Transient."""
    pass


class ProcessingError(DomainError):
    """Raised when verified content cannot be processed."""
    pass


class DecompressionError(ProcessingError):
    """Raised when a gzip payload is corrupt or not gzip at all."""
    pass
