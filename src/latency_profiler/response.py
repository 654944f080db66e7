"""
Send the request, time the read, and pull the status code and body out of
the raw bytes.
"""

import re
import socket
import time
from typing import Tuple

from latency_profiler.config import READ_CHUNK_SIZE
from latency_profiler.errors import AttemptError, ResponseParseError
from latency_profiler.models import FailureKind, ResponseProperties

STATUS_LINE = re.compile(r"^HTTP/1\.1 (?P<status_code>.*?) ")
HEADER_TERMINATOR = "\r\n\r\n"


def read_to_end(connection: socket.socket, chunk_size: int = READ_CHUNK_SIZE) -> bytes:
    chunks = []
    while True:
        data = connection.recv(chunk_size)
        if not data:
            break
        chunks.append(data)
    return b"".join(chunks)


def fetch(connection: socket.socket, request: str, chunk_size: int = READ_CHUNK_SIZE) -> ResponseProperties:
    """
    Write the request and read until the server closes the connection.

    Only the read is timed. The caller owns the connection and closes it.
    """
    try:
        connection.sendall(request.encode("utf-8"))
        before = time.perf_counter()
        raw = read_to_end(connection, chunk_size)
        elapsed = time.perf_counter() - before
    except socket.timeout as e:
        raise AttemptError(FailureKind.TIMEOUT, f"Timed out talking to server: {e}") from e
    except OSError as e:
        raise AttemptError(FailureKind.IO_FAILURE, f"Connection error: {e}") from e

    try:
        code, page = parse_status_code_and_page(raw)
    except ResponseParseError as e:
        raise AttemptError(FailureKind.PARSE_FAILURE, str(e)) from e

    return ResponseProperties(time_taken=elapsed, status_code=code, document=page)


def parse_status_code_and_page(raw: bytes) -> Tuple[int, str]:
    """
    Return the status code and just the response body.

    Empty input is not an error: it gives (0, ""). A status code field that
    is not an integer gives 0, but a missing status line raises
    ResponseParseError.
    """
    text = raw.decode("utf-8", errors="replace")
    if not text:
        return 0, ""

    match = STATUS_LINE.match(text)
    if match is None:
        first_line = text.split("\r\n", 1)[0][:80]
        raise ResponseParseError(f"Malformed response: no HTTP/1.1 status line in {first_line!r}")
    code = match.group("status_code")
    status_code = int(code) if code.isascii() and code.isdigit() else 0

    # headers end at the first blank line; no blank line means no separable headers
    if HEADER_TERMINATOR in text:
        page = text.split(HEADER_TERMINATOR, 1)[1]
    else:
        page = text
    return status_code, page
