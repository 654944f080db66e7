"""
Data model for a profiling session.

A session is a ``ProfileRun``: the target, the requested number of attempts
and one record per attempt, either a ``ResponseProperties`` on success or a
``FailureRecord`` on failure.
"""

from enum import Enum
from typing import List, Literal, Optional
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PORTS = {"http": 80, "https": 443}


class Target(BaseModel):
    model_config = ConfigDict(frozen=True)

    scheme: Literal["http", "https"]
    host: str
    port: Optional[int] = None
    path: str = "/"
    query: str = ""

    @classmethod
    def from_url(cls, url: str) -> "Target":
        """Parse and validate a URL. Raises ValueError for anything we cannot profile."""
        parts = urlsplit(url)
        if parts.scheme not in DEFAULT_PORTS:
            raise ValueError("We only support HTTP and HTTPS respectively")
        if not parts.hostname:
            raise ValueError(f"No host in URL {url!r}")
        if ":" not in parts.hostname:
            try:
                parts.hostname.encode("idna")
            except UnicodeError as e:
                raise ValueError(f"Invalid host name {parts.hostname!r}: {e}") from e
        # .port raises ValueError itself when the port is out of range
        return cls(
            scheme=parts.scheme,
            host=parts.hostname,
            port=parts.port,
            path=parts.path or "/",
            query=parts.query,
        )

    @property
    def effective_port(self) -> int:
        return self.port if self.port is not None else DEFAULT_PORTS[self.scheme]

    @property
    def host_header(self) -> str:
        """Host as written in a URL or Host header: IPv6 literals in brackets."""
        if ":" in self.host:
            return f"[{self.host}]"
        return self.host

    @property
    def request_path(self) -> str:
        if self.query:
            return f"{self.path}?{self.query}"
        return self.path

    @property
    def is_tls(self) -> bool:
        return self.scheme == "https"

    def __str__(self) -> str:
        netloc = self.host_header if self.port is None else f"{self.host_header}:{self.port}"
        return f"{self.scheme}://{netloc}{self.request_path}"


class ResponseProperties(BaseModel):
    model_config = ConfigDict(frozen=True)

    time_taken: float  # seconds spent reading the response
    status_code: int
    document: str

    @property
    def size(self) -> int:
        """Body length in bytes."""
        return len(self.document.encode("utf-8"))


class FailureKind(str, Enum):
    TIMEOUT = "timeout"
    HANDSHAKE_FAILURE = "handshake_failure"
    PARSE_FAILURE = "parse_failure"
    IO_FAILURE = "io_failure"


class FailureRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: FailureKind
    detail: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.detail}"


class ProfileRun(BaseModel):
    target: Target
    number_of_requests: int = Field(gt=0)
    successful_responses: List[ResponseProperties] = Field(default_factory=list)
    failed_responses: List[FailureRecord] = Field(default_factory=list)

    @property
    def total_requests(self) -> int:
        return len(self.successful_responses) + len(self.failed_responses)
