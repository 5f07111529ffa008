"""
Error types for the Price Sheet Generator.

Each failure mode of the upload pipeline has its own exception so the
HTTP layer can map it to the right status code and give the operator
something actionable to do about it.
"""

from typing import Dict, List, Any


class PriceSheetError(Exception):
    """Base exception for all price sheet errors."""

    def __init__(self, message: str, details: Dict[str, Any] = None, suggestions: List[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.suggestions = suggestions or []

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'details': self.details,
            'suggestions': self.suggestions
        }


class ValidationError(PriceSheetError):
    """Raised when user input validation fails."""
    pass


class ConfigurationError(PriceSheetError):
    """Raised when configuration is invalid or missing."""
    pass


class ProcessingError(PriceSheetError):
    """Raised when the generation pipeline fails."""
    pass


class LoadError(ProcessingError):
    """Raised when the uploaded spreadsheet cannot be read."""
    pass


class RenderError(ProcessingError):
    """Raised when card or grid rendering fails."""
    pass


class AssetError(RenderError):
    """Raised when an image asset exists but cannot be decoded."""
    pass


class ExportError(ProcessingError):
    """Raised when the PNG or PDF output cannot be written."""
    pass


class NoFileUploadedError(ValidationError):
    """Raised when the upload request carries no file."""

    def __init__(self, field_name: str = 'file'):
        super().__init__(
            "No file uploaded.",
            details={'field_name': field_name},
            suggestions=[
                f"Send the spreadsheet as multipart form field '{field_name}'",
                "Make sure a file was actually selected before submitting"
            ]
        )


class EmptySpreadsheetError(LoadError):
    """Raised when the first sheet has no product rows."""

    def __init__(self, path: str, sheet_name: str = None):
        super().__init__(
            "Spreadsheet contains no product rows",
            details={
                'path': path,
                'sheet_name': sheet_name
            },
            suggestions=[
                "Put the column headers in row 1 of the first sheet",
                "Add at least one product row below the headers",
                "Check that the products are not on a later sheet"
            ]
        )


class UnwritableOutputError(ExportError):
    """Raised when an output file cannot be written to disk."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Could not write output file: {path}",
            details={
                'path': path,
                'reason': reason
            },
            suggestions=[
                "Check that the output folder exists and is writable",
                "Free up disk space",
                "Make sure no other program holds the file open"
            ]
        )
