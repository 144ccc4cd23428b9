"""Custom exceptions for the DealDesk application."""


class DealDeskException(Exception):
    """Base exception for DealDesk application."""
    
    pass


class ValidationError(DealDeskException):
    """Raised when validation fails."""
    
    pass


class NotFoundError(DealDeskException):
    """Raised when a resource is not found."""
    
    pass


class ServiceError(DealDeskException):
    """Raised when a service operation fails."""
    
    pass


class ConfigurationError(DealDeskException):
    """Raised when configuration is invalid."""
    
    pass


class InvalidRateError(ValidationError):
    """Raised when an exchange rate is non-positive, non-finite or non-numeric."""
    
    pass


class ZeroRevenueError(ValidationError):
    """Raised when a margin is requested for a deal with no revenue."""
    
    pass
