# toolboard/errors.py


class ToolboardError(Exception):
    """Base class for errors raised by the toolboard package."""


class CatalogLoadError(ToolboardError):
    """The catalog document could not be fetched or parsed."""


class ManifestError(ToolboardError):
    """A required generator input (manifest or locale file) is missing or malformed."""
