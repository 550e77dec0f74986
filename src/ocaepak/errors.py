"""Errors raised by the OCA client."""


class OcaError(Exception):
    """Base class for every error raised by this library."""


class TransportError(OcaError):
    """The upstream host could not be reached or did not answer in time."""


class UpstreamError(OcaError):
    """The upstream service answered with a failure status.

    The message is the raw response body, as sent by the service.
    """

    def __init__(self, body: str, status_code: int):
        super().__init__(body)
        self.body = body
        self.status_code = status_code


class ParseError(OcaError):
    """The response body is not well-formed XML."""


class ShapeError(OcaError):
    """A parsed document is missing an element the operation needs."""
