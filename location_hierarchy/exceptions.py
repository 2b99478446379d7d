"""
Custom exception classes for the location hierarchy package.

Lookup and resolution operations never raise for unrecognised free-text
input; these exceptions cover loading a corrupt dataset, invalid
configuration and invalid rating submissions.
"""

from typing import Optional, List, Dict, Any


class LocationHierarchyError(Exception):
    """Base exception class for all location hierarchy errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        """
        Initialize the base error.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            context: Optional context information about the error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'error_code': self.error_code,
            'context': self.context
        }


class ValidationError(LocationHierarchyError):
    """Exception raised for data validation errors."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 invalid_value: Any = None, validation_rules: Optional[List[str]] = None):
        """
        Initialize validation error.

        Args:
            message: Human-readable error message
            field_name: Name of the field that failed validation
            invalid_value: The invalid value that caused the error
            validation_rules: List of validation rules that were violated
        """
        context = {
            'field_name': field_name,
            'invalid_value': str(invalid_value) if invalid_value is not None else None,
            'validation_rules': validation_rules or []
        }
        super().__init__(message, error_code='VALIDATION_ERROR', context=context)
        self.field_name = field_name
        self.invalid_value = invalid_value
        self.validation_rules = validation_rules or []


class DataLoadError(LocationHierarchyError):
    """Exception raised when a location table cannot be read or parsed."""

    def __init__(self, message: str, file_path: Optional[str] = None,
                 line_number: Optional[int] = None, original_error: Optional[Exception] = None):
        """
        Initialize data load error.

        Args:
            message: Human-readable error message
            file_path: Path to the file that caused the error
            line_number: Line number where the error occurred
            original_error: Original exception that caused this error
        """
        context = {
            'file_path': file_path,
            'line_number': line_number,
            'original_error': str(original_error) if original_error else None,
            'original_error_type': type(original_error).__name__ if original_error else None
        }
        super().__init__(message, error_code='DATA_LOAD_ERROR', context=context)
        self.file_path = file_path
        self.line_number = line_number
        self.original_error = original_error


class FileAccessError(LocationHierarchyError):
    """Exception raised for file access and I/O errors."""

    def __init__(self, message: str, file_path: str, operation: str,
                 original_error: Optional[Exception] = None):
        """
        Initialize file access error.

        Args:
            message: Human-readable error message
            file_path: Path to the file that caused the error
            operation: Type of operation that failed (read, write, etc.)
            original_error: Original exception that caused this error
        """
        context = {
            'file_path': file_path,
            'operation': operation,
            'original_error': str(original_error) if original_error else None,
            'original_error_type': type(original_error).__name__ if original_error else None
        }
        super().__init__(message, error_code='FILE_ACCESS_ERROR', context=context)
        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error


class ConfigurationError(LocationHierarchyError):
    """Exception raised for configuration errors."""

    def __init__(self, message: str, config_key: Optional[str] = None,
                 config_value: Any = None, valid_values: Optional[List[Any]] = None):
        """
        Initialize configuration error.

        Args:
            message: Human-readable error message
            config_key: Configuration key that has invalid value
            config_value: Invalid configuration value
            valid_values: List of valid values for the configuration key
        """
        context = {
            'config_key': config_key,
            'config_value': str(config_value) if config_value is not None else None,
            'valid_values': [str(v) for v in valid_values] if valid_values else None
        }
        super().__init__(message, error_code='CONFIGURATION_ERROR', context=context)
        self.config_key = config_key
        self.config_value = config_value
        self.valid_values = valid_values or []


class HierarchyValidationError(ValidationError):
    """Exception raised when a location table breaks the hierarchy invariants."""

    def __init__(self, message: str, hierarchy_level: Optional[str] = None,
                 issues: Optional[List[str]] = None, file_path: Optional[str] = None):
        """
        Initialize hierarchy validation error.

        Args:
            message: Human-readable error message
            hierarchy_level: Level where the first violation was found
                (city, district or neighborhood)
            issues: Every violation found in the table
            file_path: Location table that was being validated
        """
        super().__init__(
            message=message,
            field_name=hierarchy_level,
            validation_rules=[
                'neighborhood belongs to exactly one district of exactly one city',
                'district names are unique within a city',
                'city names are unique',
                'no blank names'
            ]
        )
        self.error_code = 'HIERARCHY_VALIDATION_ERROR'
        self.context.update({
            'hierarchy_level': hierarchy_level,
            'issues': issues or [],
            'file_path': file_path
        })
        self.hierarchy_level = hierarchy_level
        self.issues = issues or []
        self.file_path = file_path


# Utility functions for exception handling

def create_validation_error(field_name: str, value: Any, rules: List[str]) -> ValidationError:
    """
    Create a standardized validation error.

    Args:
        field_name: Name of the field that failed validation
        value: Invalid value
        rules: List of validation rules that were violated

    Returns:
        ValidationError instance
    """
    message = f"Validation failed for field '{field_name}' with value '{value}'"
    if rules:
        message += f". Violated rules: {', '.join(rules)}"

    return ValidationError(
        message=message,
        field_name=field_name,
        invalid_value=value,
        validation_rules=rules
    )


def create_file_error(operation: str, file_path: str, original_error: Exception) -> FileAccessError:
    """
    Create a standardized file access error.

    Args:
        operation: Type of file operation that failed
        file_path: Path to the file
        original_error: Original exception

    Returns:
        FileAccessError instance
    """
    message = f"Failed to {operation} file '{file_path}': {str(original_error)}"

    return FileAccessError(
        message=message,
        file_path=file_path,
        operation=operation,
        original_error=original_error
    )
