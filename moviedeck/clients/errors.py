from typing import Optional


class MovieClientError(Exception):
    """Base class for failures talking to the movie metadata service."""


class RemoteError(MovieClientError):
    """
    The service answered with a non-2xx status, or could not be reached
    at all (status is None in that case).
    """

    def __init__(self, status: Optional[int], url: str = '', reason: str = ''):
        self.status = status
        self.url = url
        if status is None:
            message = f"TMDB unreachable: {reason or 'transport error'}"
        else:
            message = f"HTTP error! status: {status}"
        super().__init__(message)


class DecodeError(MovieClientError):
    """The response body was not the JSON document we expected."""
