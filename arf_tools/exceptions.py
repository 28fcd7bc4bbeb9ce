"""Custom exceptions for the arf.json tools."""


class ArfToolsError(Exception):
    """Base class for errors raised by this package."""


class ArfParseError(ArfToolsError):
    """Raised when the catalog file cannot be read or is not valid JSON."""

    def __init__(self, path: str, original: Exception):
        self.path = path
        self.original = original
        super().__init__(f"Could not load {path}: {original}")


class InvalidUrlError(ArfToolsError):
    """Raised when a catalog URL cannot be turned into a request target."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(reason)
