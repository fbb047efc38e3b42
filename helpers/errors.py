# helpers/errors.py — error taxonomy surfaced through futures/callbacks


class AltsTradeError(Exception):
    """Base class for every failure the client reports to its caller."""


class CredentialsMissingError(AltsTradeError):
    def __init__(self, message: str = "Must provide public and private keys to make this API request."):
        super().__init__(message)


class NetworkError(AltsTradeError):
    """Connection, DNS or TLS failure. The underlying requests error is kept on .original."""

    def __init__(self, message: str, original: Exception = None):
        super().__init__(message)
        self.original = original


class RequestTimeoutError(NetworkError):
    pass


class ParseError(AltsTradeError, ValueError):
    """Response body was not valid JSON."""

    def __init__(self, message: str, original: Exception = None, body: str = ""):
        super().__init__(message)
        self.original = original
        self.body = body
