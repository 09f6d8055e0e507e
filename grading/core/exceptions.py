"""
Custom exceptions for the grading system.
"""

from typing import Optional, Any, Dict


class GradingError(Exception):
    """Base exception for all grading-system errors."""
    
    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ValidationError(GradingError):
    """Raised when a student number, name or mark set is malformed."""
    pass


class ResourceNotFoundError(GradingError):
    """Raised when a requested student record does not exist."""
    pass


class ResourceExhaustedError(GradingError):
    """Raised when no unique student number could be generated."""
    pass


class PersistenceError(GradingError):
    """Raised when persistence operations fail."""
    pass


class ConfigurationError(GradingError):
    """Raised when configuration is invalid."""
    pass
