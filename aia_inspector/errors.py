"""Exception types raised by the inspector."""


class InspectorError(Exception):
    """Base class for inspector errors."""
    pass


class InvalidInputError(InspectorError):
    """A required identity field is missing or an input item has the wrong shape.

    Args:
        message: Human-readable description.
        field: Name of the offending argument or list (e.g. 'extensions').
        index: Position of the offending item when ``field`` is a list.
    """

    def __init__(self, message: str, field: str | None = None, index: int | None = None):
        super().__init__(message)
        self.field = field
        self.index = index


class CatalogUnavailableError(InspectorError):
    """The built-in descriptor source could not be loaded or parsed."""
    pass


class BundleReadError(InspectorError):
    """Error reading a decoded bundle document."""
    pass
