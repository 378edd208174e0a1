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
"""Client configuration module."""

from __future__ import annotations

__all__ = [
    "Action",
    "Configuration",
    "validate_port",
]

import dataclasses
import enum
import re
from typing import Self

from .constants import DEFAULT_HOST, DEFAULT_PORT, MAX_PORT_NUMBER
from .exceptions import ArgumentError

_PORT_PATTERN = re.compile(r"[0-9]+")


@enum.unique
class Action(enum.Enum):
    """
    The text transformations a server can be asked to apply.

    The client never performs them: only the keyword is transmitted.
    """

    UPPERCASE = "uppercase"
    LOWERCASE = "lowercase"
    REVERSE = "reverse"
    TITLE_CASE = "title-case"
    SHUFFLE = "shuffle"

    @classmethod
    def parse(cls, keyword: str) -> Self:
        """
        Returns the action named `keyword`. The match is exact and case-sensitive.

        Raises:
            ArgumentError: `keyword` is not a recognized action.
        """
        try:
            return cls(keyword)
        except ValueError:
            raise ArgumentError(f"Unrecognized action: {keyword!r}") from None

    def __str__(self) -> str:
        return self.value


def validate_port(port: str) -> str:
    """
    Checks that `port` only contains decimal digits and is in range.

    Returns:
        `port` itself.

    Raises:
        ArgumentError: Invalid port.
    """
    if _PORT_PATTERN.fullmatch(port) is None:
        raise ArgumentError(f"Incorrect port number usage: {port!r}")
    if len(port.lstrip("0")) > len(str(MAX_PORT_NUMBER)) or int(port) > MAX_PORT_NUMBER:
        raise ArgumentError(f"Incorrect port number usage. Please specify a port in range (got {port})")
    return port


@dataclasses.dataclass(frozen=True, kw_only=True, slots=True)
class Configuration:
    """
    Everything needed to perform one request. Read-only once constructed.
    """

    action: Action
    """The transformation to request."""

    message: bytes
    """The payload. Treated as an opaque byte sequence."""

    host: str = DEFAULT_HOST
    """Target host name or address."""

    port: str = DEFAULT_PORT
    """Target port, as decimal digits."""

    def __post_init__(self) -> None:
        if not isinstance(self.action, Action):
            object.__setattr__(self, "action", Action.parse(self.action))
        if not isinstance(self.message, (bytes, bytearray, memoryview)):
            raise TypeError(f"message must be a bytes-like object, got {self.message!r}")
        object.__setattr__(self, "message", bytes(self.message))
        if not self.host:
            raise ArgumentError("Host must not be empty")
        validate_port(self.port)
