"""
Transport connector: resolves the target and opens a fresh TCP (or TLS)
connection for every attempt.
"""

import logging
import socket
import ssl
from typing import List, Optional, Tuple

from latency_profiler.config import ProfilerConfig
from latency_profiler.errors import AttemptError, NotReachableError, TlsUnavailableError
from latency_profiler.models import FailureKind, Target

logger = logging.getLogger(__name__)

Address = Tuple[int, tuple]  # (family, sockaddr)


def format_address(sockaddr: tuple) -> str:
    host, port = sockaddr[0], sockaddr[1]
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


class Connector:
    def __init__(self, target: Target, config: Optional[ProfilerConfig] = None):
        self.target = target
        self.config = config or ProfilerConfig()
        self._ssl_context: Optional[ssl.SSLContext] = None

    def resolve(self) -> List[Address]:
        """Resolve the target host, keeping the resolver's order."""
        try:
            infos = socket.getaddrinfo(
                self.target.host, self.target.effective_port, type=socket.SOCK_STREAM
            )
        except (socket.gaierror, UnicodeError) as e:
            # UnicodeError: the host cannot be IDNA-encoded
            raise NotReachableError(f"Could not resolve {self.target.host}: {e}") from e
        if not infos:
            raise NotReachableError(f"No addresses found for {self.target.host}")
        return [(family, sockaddr) for family, _, _, _, sockaddr in infos]

    def open_regular(self) -> socket.socket:
        """
        Connect to the first reachable address.

        socket.create_connection would also walk the address list, but it
        does not tell us which addresses failed and why.
        """
        for family, sockaddr in self.resolve():
            sock = None
            try:
                sock = socket.socket(family, socket.SOCK_STREAM)
                sock.settimeout(self.config.connect_timeout)
                sock.connect(sockaddr)
            except OSError as e:
                if sock is not None:
                    sock.close()
                logger.warning(f"Error connecting to {format_address(sockaddr)}: {e}")
                continue
            # bounds both sendall and recv for the rest of the attempt
            sock.settimeout(self.config.io_timeout)
            logger.debug(f"Connected to {format_address(sockaddr)}")
            return sock

        raise NotReachableError()

    def tls_context(self) -> ssl.SSLContext:
        if self._ssl_context is None:
            try:
                self._ssl_context = ssl.create_default_context()
            except (ssl.SSLError, OSError) as e:
                raise TlsUnavailableError(f"Could not initialise TLS: {e}") from e
        return self._ssl_context

    def open_tls(self) -> ssl.SSLSocket:
        context = self.tls_context()
        sock = self.open_regular()
        try:
            return context.wrap_socket(sock, server_hostname=self.target.host)
        except OSError as e:
            # ssl.SSLError and certificate errors are OSError subclasses
            sock.close()
            raise AttemptError(FailureKind.HANDSHAKE_FAILURE, f"TLS handshake with {self.target.host} failed: {e}") from e

    def open(self) -> socket.socket:
        if self.target.is_tls:
            return self.open_tls()
        return self.open_regular()
