"""
Custom Exception Classes for the JobAI matching core
"""
from typing import Dict, Any

from pymongo.errors import PyMongoError


class JobAIBaseException(Exception):
    """Base exception for the matching core"""

    def __init__(
        self,
        message: str,
        error_code: str = None,
        details: Dict[str, Any] = None,
        cause: Exception = None
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/response"""
        result = {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class ValidationError(JobAIBaseException):
    """Raised when data validation fails"""

    def __init__(self, message: str, field: str = None, value: Any = None, **kwargs):
        details = kwargs.pop('details', {})
        if field:
            details['field'] = field
        if value is not None:
            details['invalid_value'] = str(value)
        super().__init__(message, error_code="VALIDATION_ERROR", details=details, **kwargs)


class UnsupportedFormatError(JobAIBaseException):
    """Raised when an uploaded document's MIME type is not PDF, DOC or DOCX"""

    def __init__(self, message: str, mime_type: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if mime_type:
            details['mime_type'] = mime_type
        super().__init__(message, error_code="UNSUPPORTED_FORMAT", details=details, **kwargs)


class ExtractionError(JobAIBaseException):
    """Raised when no text can be decoded from a document (corrupted, encrypted, image-only)"""

    def __init__(self, message: str, document_type: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if document_type:
            details['document_type'] = document_type
        super().__init__(message, error_code="EXTRACTION_FAILURE", details=details, **kwargs)


class InsufficientTextError(JobAIBaseException):
    """Raised when extracted text is too short to be a usable resume"""

    def __init__(self, message: str, length: int = None, minimum: int = None, **kwargs):
        details = kwargs.pop('details', {})
        if length is not None:
            details['length'] = length
        if minimum is not None:
            details['minimum'] = minimum
        super().__init__(message, error_code="INSUFFICIENT_TEXT", details=details, **kwargs)


class AnalysisProviderError(JobAIBaseException):
    """Raised when the external AI provider call or its response parsing fails"""

    def __init__(self, message: str, provider: str = None, status_code: int = None, **kwargs):
        details = kwargs.pop('details', {})
        if provider:
            details['provider'] = provider
        if status_code:
            details['status_code'] = status_code
        super().__init__(message, error_code="ANALYSIS_PROVIDER_ERROR", details=details, **kwargs)


class DatabaseError(JobAIBaseException):
    """Raised when database operations fail"""

    def __init__(self, message: str, operation: str = None, collection: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if operation:
            details['operation'] = operation
        if collection:
            details['collection'] = collection
        super().__init__(message, error_code="DATABASE_ERROR", details=details, **kwargs)


class ProcessingError(JobAIBaseException):
    """Raised when resume processing fails"""

    def __init__(self, message: str, document_id: str = None, document_type: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if document_id:
            details['document_id'] = document_id
        if document_type:
            details['document_type'] = document_type
        super().__init__(message, error_code="PROCESSING_ERROR", details=details, **kwargs)


class ConfigurationError(JobAIBaseException):
    """Raised when configuration is invalid or missing"""

    def __init__(self, message: str, config_key: str = None, config_value: Any = None, **kwargs):
        details = kwargs.pop('details', {})
        if config_key:
            details['config_key'] = config_key
        if config_value is not None:
            details['config_value'] = str(config_value)
        super().__init__(message, error_code="CONFIGURATION_ERROR", details=details, **kwargs)


class ResumeNotFoundError(JobAIBaseException):
    """Raised when a resume id is unknown"""

    def __init__(self, resume_id: str, **kwargs):
        super().__init__(
            f"Resume {resume_id} not found",
            error_code="RESUME_NOT_FOUND",
            details={"resume_id": resume_id},
            **kwargs
        )


class BusinessLogicError(JobAIBaseException):
    """Raised when business logic validation fails"""

    def __init__(self, message: str, rule: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if rule:
            details['business_rule'] = rule
        kwargs.setdefault('error_code', "BUSINESS_LOGIC_ERROR")
        super().__init__(message, details=details, **kwargs)


class AnalysisInProgressError(BusinessLogicError):
    """Raised when a resume is submitted for analysis while one is already running"""

    def __init__(self, resume_id: str, **kwargs):
        super().__init__(
            "Resume is already being processed",
            rule="single_inflight_analysis",
            error_code="ANALYSIS_IN_PROGRESS",
            details={"resume_id": resume_id},
            **kwargs
        )


class ExceptionContext:
    """Context manager for handling exceptions with additional context"""

    def __init__(self, operation: str, logger=None, **context):
        self.operation = operation
        self.logger = logger
        self.context = context

    def __enter__(self):
        if self.logger:
            self.logger.debug(f"Starting operation: {self.operation}", extra={"context": self.context})
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            if self.logger:
                self.logger.debug(f"Operation completed: {self.operation}", extra={"context": self.context})
            return False

        if self.logger:
            self.logger.error(
                f"Operation failed: {self.operation} - {exc_val}",
                extra={"context": self.context, "exception_type": exc_type.__name__}
            )

        # Re-raise custom exceptions and cancellation as-is
        if isinstance(exc_val, JobAIBaseException) or not isinstance(exc_val, Exception):
            return False

        if isinstance(exc_val, (KeyError, ValueError, TypeError)):
            raise ValidationError(
                f"Validation error in {self.operation}: {str(exc_val)}",
                details=dict(self.context),
                cause=exc_val
            ) from exc_val
        if isinstance(exc_val, PyMongoError) or "mongo" in str(exc_val).lower() or "database" in str(exc_val).lower():
            raise DatabaseError(
                f"Database error in {self.operation}: {str(exc_val)}",
                operation=self.operation,
                details=dict(self.context),
                cause=exc_val
            ) from exc_val
        raise ProcessingError(
            f"Processing error in {self.operation}: {str(exc_val)}",
            details=dict(self.context),
            cause=exc_val
        ) from exc_val
