class ChartMCPError(Exception):
    """Base class for every error raised by the ingest and generate path."""


class DataIOError(ChartMCPError, OSError):
    """The data file is missing, unreadable or not a regular file."""


class ValidationError(ChartMCPError):
    """A request or file broke a validation rule (size, type, name, shape)."""


class FormatError(ChartMCPError):
    """File content could not be parsed according to its declared format."""


class ShapeError(FormatError, ValidationError):
    """Content parsed but its structure is not what the loader accepts."""


class GenerationError(ChartMCPError):
    """The LLM returned something that is not a usable chart option."""
