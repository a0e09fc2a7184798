"""Exception types for lombok.jar provisioning."""


class JarDownloadError(Exception):
    """Base exception for lombok.jar download failures."""

    pass


class DownloadRequestError(JarDownloadError):
    """The request could not be completed (connection, timeout, unreadable body)."""

    pass


class DownloadStatusError(JarDownloadError):
    """The server answered with a non-success status code."""

    def __init__(self, message: str, status_code: int):
        self.status_code = status_code
        super().__init__(message)


class JarWriteError(JarDownloadError):
    """The downloaded jar could not be written to disk."""

    pass
