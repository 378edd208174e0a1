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
"""Single request session module."""

from __future__ import annotations

__all__ = ["RequestSession", "SessionState"]

import contextlib
import enum
import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Self, final

from . import protocol
from .connection import Connection, connect
from .exceptions import TCPClientError

if TYPE_CHECKING:
    from types import TracebackType

    from .config import Configuration


@enum.unique
class SessionState(enum.Enum):
    UNCONFIGURED = enum.auto()
    CONFIGURED = enum.auto()
    CONNECTED = enum.auto()
    REQUEST_SENT = enum.auto()
    RESPONSE_RECEIVED = enum.auto()
    CLOSED = enum.auto()
    FAILED = enum.auto()


@final
class RequestSession:
    """
    Drives one request/response exchange.

    The steps must be called in order: :meth:`connect`, :meth:`send_request`, :meth:`receive_response`
    and :meth:`close`. Any error is fatal: the session switches to :attr:`SessionState.FAILED`,
    the connection is released, and the error is propagated.
    """

    __slots__ = ("__config", "__logger", "__timeout", "__connection", "__state")

    def __init__(
        self,
        config: Configuration,
        *,
        timeout: float | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """
        Parameters:
            config: The request to perform.
            timeout: If given, the timeout (in seconds) of the blocking socket operations.
            logger: If given, the logger instance to use.
        """
        self.__state: SessionState = SessionState.UNCONFIGURED
        self.__config: Configuration = config
        self.__logger: logging.Logger = logger or logging.getLogger(__name__)
        self.__timeout: float | None = timeout
        self.__connection: Connection | None = None
        self.__state = SessionState.CONFIGURED

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} state={self.__state.name} connection={self.__connection!r}>"

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_val is not None:
            self.__abort()
            return
        self.close()

    @property
    def state(self) -> SessionState:
        """The current state of the run."""
        return self.__state

    @property
    def config(self) -> Configuration:
        return self.__config

    @property
    def connection(self) -> Connection | None:
        """The established connection, or :data:`None` if there is none."""
        return self.__connection

    def connect(self) -> None:
        """
        Establishes the connection.

        Raises:
            ResolutionError: the host could not be resolved.
            SocketCreationError: the local endpoint could not be created.
            ConnectError: the connection failed.
        """
        self.__check_state(SessionState.CONFIGURED)
        with self.__fail_on_error():
            self.__connection = connect(
                self.__config.host,
                self.__config.port,
                timeout=self.__timeout,
                logger=self.__logger,
            )
        self.__state = SessionState.CONNECTED

    def send_request(self) -> int:
        """
        Sends the request frame.

        Raises:
            SendError: the frame could not be fully written.

        Returns:
            the number of bytes sent.
        """
        connection = self.__check_state(SessionState.CONNECTED)
        with self.__fail_on_error():
            sent = protocol.send_request(connection, self.__config.action, self.__config.message, logger=self.__logger)
        self.__state = SessionState.REQUEST_SENT
        return sent

    def receive_response(self, buffer: bytearray | memoryview, capacity: int | None = None) -> int:
        """
        Reads the response into `buffer`, with a single receive call.

        Raises:
            ReceiveError: no data could be read.

        Returns:
            the number of bytes received.
        """
        connection = self.__check_state(SessionState.REQUEST_SENT)
        with self.__fail_on_error():
            nbytes = protocol.receive_response(connection, buffer, capacity, logger=self.__logger)
        self.__state = SessionState.RESPONSE_RECEIVED
        return nbytes

    def close(self) -> None:
        """
        Releases the connection.

        Does nothing if the session is already closed or has failed.

        Raises:
            CloseError: the release call reported an error.
        """
        if self.__state in (SessionState.CLOSED, SessionState.FAILED):
            return
        connection, self.__connection = self.__connection, None
        if connection is None:
            self.__state = SessionState.CLOSED
            return
        self.__logger.info("Closing socket")
        try:
            connection.close()
        except TCPClientError:
            self.__state = SessionState.FAILED
            raise
        self.__state = SessionState.CLOSED

    def __check_state(self, expected: SessionState) -> Connection:
        if self.__state is not expected:
            raise RuntimeError(f"Invalid session state: expected {expected.name}, got {self.__state.name}")
        connection = self.__connection
        assert connection is not None or expected is SessionState.CONFIGURED  # nosec assert_used
        return connection  # type: ignore[return-value]

    @contextlib.contextmanager
    def __fail_on_error(self) -> Iterator[None]:
        try:
            yield
        except TCPClientError:
            self.__abort()
            raise

    def __abort(self) -> None:
        self.__state = SessionState.FAILED
        connection, self.__connection = self.__connection, None
        if connection is not None:
            try:
                connection.close()
            except TCPClientError as exc:
                self.__logger.debug("Close failed while aborting: %s", exc)
