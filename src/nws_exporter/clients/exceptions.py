"""Exceptions raised by the NWS API client."""


class ClientError(Exception):
    """Base exception for NWS API errors."""

    pass


class InvalidStationError(ClientError):
    """The station identifier does not exist upstream (HTTP 404)."""

    def __init__(self, station_id: str) -> None:
        super().__init__(f"invalid station {station_id}")
        self.station_id = station_id


class UnexpectedStatusError(ClientError):
    """The API answered with a status other than 200 or 404."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"unexpected status {status_code} for {url}")
        self.status_code = status_code
        self.url = url


class MalformedResponseError(ClientError):
    """A 200 response body could not be decoded into the expected shape."""

    def __init__(self, url: str, detail: str) -> None:
        super().__init__(f"malformed response from {url}: {detail}")
        self.url = url
        self.detail = detail


class TransportError(ClientError):
    """Network failure reaching the API (DNS, connect, timeout, TLS)."""

    def __init__(self, url: str, cause: Exception) -> None:
        super().__init__(f"request to {url} failed: {cause!r}")
        self.url = url
        self.cause = cause
