"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class StoreUnavailableError(AdapterError):
    """The document store could not be reached or failed the request."""

    pass


class ScrollExpiredError(StoreUnavailableError):
    """A scroll cursor expired or was never issued.

    Scans are not resumable; the caller has to start over.
    """

    pass


class StoreRequestError(AdapterError):
    """The document store rejected a request as malformed.

    Unlike StoreUnavailableError this is not transient; retrying the same
    request fails the same way.
    """

    def __init__(self, message: str, status_code: int):
        self.status_code = status_code
        super().__init__(message)
