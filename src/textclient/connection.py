# Copyright 2021-2025, Francis Clairicia-Rose-Claire-Josephine
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
#
"""Stream connection module."""

from __future__ import annotations

__all__ = ["Connection", "connect"]

import logging
import socket as _socket
import warnings
from typing import TYPE_CHECKING, Any, Self, final

from .exceptions import CloseError, ConnectError, ResolutionError, SocketCreationError

if TYPE_CHECKING:
    from types import TracebackType

    from _typeshed import ReadableBuffer, WriteableBuffer


@final
class Connection:
    """
    An established bidirectional byte stream to exactly one peer.

    The connection is owned by a single run. It is not thread-safe.
    """

    __slots__ = ("__socket", "__peer", "__weakref__")

    def __init__(self, sock: _socket.socket) -> None:
        """
        Parameters:
            sock: An already connected :data:`~socket.SOCK_STREAM` socket. The connection takes ownership of it.
        """
        if sock.type != _socket.SOCK_STREAM:
            raise ValueError("A 'SOCK_STREAM' socket is expected")
        self.__peer: Any = sock.getpeername()
        self.__socket: _socket.socket = sock

    def __del__(self, *, _warn: Any = warnings.warn) -> None:
        try:
            sock: _socket.socket = self.__socket
        except AttributeError:
            return
        if sock.fileno() >= 0:
            _warn(f"unclosed connection {self!r}", ResourceWarning, source=self)
            sock.close()

    def __repr__(self) -> str:
        try:
            return f"<{self.__class__.__name__} peer={self.__peer!r} closed={self.is_closed()}>"
        except AttributeError:
            return f"<{self.__class__.__name__} (partially initialized)>"

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def peer_address(self) -> Any:
        """The remote address, as returned by :meth:`socket.socket.getpeername`."""
        return self.__peer

    def fileno(self) -> int:
        """Returns the socket's file descriptor, or ``-1`` if the connection is closed."""
        return self.__socket.fileno()

    def is_closed(self) -> bool:
        return self.__socket.fileno() < 0

    def send(self, data: ReadableBuffer) -> int:
        """
        Performs exactly one :meth:`~socket.socket.send` call.

        Returns:
            the number of bytes written, which can be less than the length of `data`.

        Raises:
            OSError: the underlying system call failed.
        """
        return self.__socket.send(data)

    def recv_into(self, buffer: WriteableBuffer, nbytes: int) -> int:
        """
        Performs exactly one :meth:`~socket.socket.recv_into` call, reading at most `nbytes` bytes.

        Returns:
            the number of bytes read. ``0`` means the peer has closed its end.

        Raises:
            OSError: the underlying system call failed.
        """
        return self.__socket.recv_into(buffer, nbytes)

    def close(self) -> None:
        """
        Releases the underlying socket.

        The socket is released exactly once: subsequent calls do nothing.

        Raises:
            CloseError: the release call reported an error.
        """
        sock = self.__socket
        if sock.fileno() < 0:
            return
        try:
            sock.shutdown(_socket.SHUT_RDWR)
        except OSError:
            pass
        try:
            sock.close()
        except OSError as exc:
            raise CloseError.from_os_error("Close failed", exc) from exc


def connect(
    host: str,
    port: str | int,
    *,
    timeout: float | None = None,
    logger: logging.Logger | None = None,
) -> Connection:
    """
    Resolves `host` and `port` and opens a stream connection to the first endpoint that accepts it.

    Both IPv4 and IPv6 endpoints are considered, in the order given by :func:`socket.getaddrinfo`.

    Parameters:
        host: The host name or address to connect to.
        port: The port, or service name, to connect to.
        timeout: If given, the timeout (in seconds) of the blocking socket operations.
        logger: If given, the logger instance to use.

    Raises:
        ResolutionError: `host` and `port` could not be resolved.
        SocketCreationError: the local endpoint could not be created.
        ConnectError: the connection was refused by every endpoint or has timed out.

    Returns:
        the established connection.
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    logger.info("Resolving %s:%s", host, port)
    try:
        candidates = _socket.getaddrinfo(host, port, _socket.AF_UNSPEC, _socket.SOCK_STREAM)
    except _socket.gaierror as exc:
        raise ResolutionError(f"Cannot resolve {host}:{port}: {exc.strerror}", exc.errno) from exc
    except UnicodeError as exc:
        raise ResolutionError(f"Cannot resolve {host}:{port}: {exc}") from exc
    if not candidates:
        raise ResolutionError(f"Cannot resolve {host}:{port}: no address found")

    creation_errors: list[OSError] = []
    connect_errors: list[OSError] = []
    for family, type, proto, _, address in candidates:
        logger.info("Creating socket")
        try:
            sock = _socket.socket(family, type, proto)
        except OSError as exc:
            logger.debug("Cannot create a socket for %s: %s", address, exc)
            creation_errors.append(exc)
            continue

        try:
            sock.settimeout(timeout)
            logger.info("Connecting socket to %s", address)
            sock.connect(address)
            connection = Connection(sock)
        except OSError as exc:
            sock.close()
            logger.debug("Cannot connect to %s: %s", address, exc)
            connect_errors.append(exc)
            continue
        except BaseException:
            sock.close()
            raise

        logger.info("Connected to %s", connection.peer_address)
        return connection

    if connect_errors:
        raise ConnectError.from_os_error(f"Failed to connect to {host}:{port}", connect_errors[-1]) from _merge_errors(
            connect_errors + creation_errors
        )
    raise SocketCreationError.from_os_error("Socket failed to create", creation_errors[-1]) from _merge_errors(creation_errors)


def _merge_errors(errors: list[OSError]) -> BaseException:
    if len(errors) == 1:
        return errors[0]
    return ExceptionGroup("Every endpoint has failed", errors)
