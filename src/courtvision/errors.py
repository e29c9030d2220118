"""
Errors raised by the analysis pipeline.

RequestError covers everything that goes wrong while talking to the model
endpoint. ParseError covers a response that arrived but cannot be read as an
analysis result. The agent decides what each one means for the caller.
"""

from typing import Optional


class CourtVisionError(Exception):
    """Base class for all CourtVision errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class RequestError(CourtVisionError):
    """The external analysis call failed (quota, server error, bad request)."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class NetworkError(RequestError):
    """The endpoint could not be reached or did not answer in time."""


class AuthError(RequestError):
    """Credentials are missing or were rejected by the endpoint."""


class ParseError(CourtVisionError):
    """The model answered, but not with the expected JSON shape."""

    def __init__(self, message: str, raw_text: str = "") -> None:
        self.raw_text = raw_text[:200]
        super().__init__(message)
