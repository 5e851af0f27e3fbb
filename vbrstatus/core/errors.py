"""Exception types raised inside vbrstatus."""


class VbrStatusError(Exception):
    """Base error for vbrstatus."""


class PayloadError(VbrStatusError):
    """An options or log payload stored by Veeam could not be parsed."""

    def __init__(self, kind: str, detail: str) -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(f"invalid {kind} payload: {detail}")


class ConnectionFailedError(VbrStatusError):
    """The database connection could not be opened."""
