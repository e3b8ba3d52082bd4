"""Error taxonomy shared by the stores, the service and the web layer."""


class ShorterError(Exception):
    """Base class for link shorter errors."""


class BadInput(ShorterError):
    """Missing or unparsable host, empty or undecodable target URL."""


class Unauthorized(ShorterError):
    """Token missing, unknown or expired."""


class StorageFailure(ShorterError):
    """Any error raised by the persistence layer."""


class NotFound(ShorterError):
    """Unknown or expired path."""
