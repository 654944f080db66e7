"""
Exceptions raised by the profiler.

``FatalProfilerError`` subclasses mean no further attempt can succeed and
end the session. ``AttemptError`` only fails the current attempt.
"""

from latency_profiler.models import FailureKind, FailureRecord


class ProfilerError(Exception):
    pass


class FatalProfilerError(ProfilerError):
    pass


class NotReachableError(FatalProfilerError):
    def __init__(self, message: str = "Could not connect to URL: no host was reachable"):
        super().__init__(message)


class TlsUnavailableError(FatalProfilerError):
    pass


class AttemptError(ProfilerError):
    def __init__(self, kind: FailureKind, detail: str):
        super().__init__(f"{kind.value}: {detail}")
        self.kind = kind
        self.detail = detail

    def to_record(self) -> FailureRecord:
        return FailureRecord(kind=self.kind, detail=self.detail)


class ResponseParseError(ValueError):
    """The response did not start with an HTTP/1.1 status line."""
