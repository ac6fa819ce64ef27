"""Error taxonomy shared by services and mapped to HTTP responses in musicbox.main."""


class MusicboxError(Exception):
    """Base class for errors that are reported to the client with a stable status code."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class Unauthenticated(MusicboxError):
    """No bearer token, or the token failed verification."""

    status_code = 401


class Forbidden(MusicboxError):
    """Authenticated, but lacking the required privilege."""

    status_code = 403


class NotFound(MusicboxError):
    """Referenced track, cover, or backing file does not exist."""

    status_code = 404


class ValidationError(MusicboxError):
    """Malformed or missing input, disallowed file type, or oversized upload."""

    status_code = 400


class Conflict(MusicboxError):
    """Duplicate username. Reported as 400 to keep the public API stable."""

    status_code = 400


class StoreError(MusicboxError):
    """The database rejected or failed an operation."""

    status_code = 500
