"""
Error types for the layout engine.

Configuration errors are raised before any rendering starts and abort the
whole export. Per-unit render problems never surface as exceptions; the
renderer logs them and draws a placeholder instead.
"""


class EventCanvasError(Exception):
    """Base class for engine errors"""


class ConfigurationError(EventCanvasError, ValueError):
    """Design, profile or subject data cannot be exported as given"""


class LayoutConfigurationError(ConfigurationError):
    """Page geometry places zero units per page"""

    def __init__(self, message: str, cols: int = 0, rows: int = 0):
        super().__init__(message)
        self.cols = cols
        self.rows = rows


class SubjectValidationError(ConfigurationError):
    """A subject record is missing required fields"""

    def __init__(self, message: str, index: int = -1, fields=None):
        super().__init__(message)
        self.index = index
        self.fields = list(fields or [])


class AssetError(EventCanvasError):
    """An image or QR asset could not be produced for a unit"""
