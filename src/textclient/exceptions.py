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
"""Exceptions definition module.

Here are all the exception classes defined and used by the client.
Every error is fatal for the run: none of them is retried internally.
"""

from __future__ import annotations

__all__ = [
    "ArgumentError",
    "CloseError",
    "ConnectError",
    "HelpRequested",
    "ReceiveError",
    "ResolutionError",
    "SendError",
    "SocketCreationError",
    "TCPClientError",
]

from typing import Self


class TCPClientError(Exception):
    """Base class of all the errors which make a run fail."""

    phase: str = "client"
    """Name of the phase in which the error occurred."""

    def __init__(self, message: str, errno: int | None = None) -> None:
        """
        Parameters:
            message: Error message.
            errno: Underlying status code, if any.
        """

        super().__init__(message)

        self.errno: int | None = errno
        """Underlying status code, if any."""

    @classmethod
    def from_os_error(cls, message: str, exc: OSError) -> Self:
        """Builds an error carrying the status code of `exc`."""
        return cls(f"{message}: {exc.strerror or exc}", exc.errno)

    def __str__(self) -> str:
        message = super().__str__()
        if self.errno is not None:
            return f"{message} (code {self.errno})"
        return message


class HelpRequested(Exception):
    """The ``--help`` option was given. Nothing else must be done."""


class ArgumentError(TCPClientError, ValueError):
    """Bad or missing command-line input."""

    phase = "arguments"


class ResolutionError(TCPClientError):
    """The host/port pair could not be resolved to a socket address."""

    phase = "resolve"


class SocketCreationError(TCPClientError):
    """The local endpoint could not be created."""

    phase = "socket"


class ConnectError(TCPClientError, ConnectionError):
    """The connect handshake was refused or has timed out."""

    phase = "connect"


class SendError(TCPClientError):
    """The request frame could not be fully written."""

    phase = "send"


class ReceiveError(TCPClientError):
    """No response data could be read."""

    phase = "receive"


class CloseError(TCPClientError):
    """The connection could not be released."""

    phase = "close"
