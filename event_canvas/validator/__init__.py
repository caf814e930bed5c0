from event_canvas.validator.pdf_validator import ValidationIssue, ValidationReport, validate_export

__all__ = ["ValidationIssue", "ValidationReport", "validate_export"]
