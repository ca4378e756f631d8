from typing import Optional


class TransportError(Exception):
    """
    Raised when an ARI round trip fails: the request never completed, the
    server answered with a non-2xx status, or the body could not be decoded.

    The original exception is kept as ``__cause__``.
    """

    def __init__(
        self,
        method: str,
        path: str,
        message: str,
        status_code: Optional[int] = None,
        body: str = "",
    ):
        super().__init__(f"{method} {path} failed: {message}")
        self.method = method
        self.path = path
        self.status_code = status_code
        self.body = body

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def is_conflict(self) -> bool:
        return self.status_code == 409
