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
"""Request/response wire protocol module.

A request is a single frame made of three space-separated fields::

    <action> <message_length> <message>

where ``message_length`` is the decimal byte count of ``message``. The message
may itself contain spaces: the peer relies on the declared length.

The response is an opaque byte blob, read once into a fixed-capacity buffer.
"""

from __future__ import annotations

__all__ = ["encode_request", "receive_response", "send_request"]

import logging
from typing import TYPE_CHECKING

from .config import Action
from .exceptions import ReceiveError, SendError

if TYPE_CHECKING:
    from .connection import Connection


def encode_request(action: Action, message: bytes) -> bytes:
    """
    Builds the request frame.

    Parameters:
        action: The requested transformation.
        message: The payload, as an opaque byte sequence.

    Returns:
        the frame to send.
    """
    message = bytes(message)
    header = b"%s %d " % (action.value.encode("ascii"), len(message))
    frame = bytearray(len(header) + len(message))
    frame[: len(header)] = header
    frame[len(header) :] = message
    return bytes(frame)


def send_request(
    connection: Connection,
    action: Action,
    message: bytes,
    *,
    logger: logging.Logger | None = None,
) -> int:
    """
    Sends the request frame in a single write.

    Parameters:
        connection: The connection to write to.
        action: The requested transformation.
        message: The payload.
        logger: If given, the logger instance to use.

    Raises:
        SendError: the write failed, or did not write the whole frame.

    Returns:
        the number of bytes sent, i.e. the frame length.
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    logger.info("Configuring message to be sent")
    frame = encode_request(action, message)
    logger.debug("Sending message %r", frame)

    try:
        sent = connection.send(frame)
    except OSError as exc:
        raise SendError.from_os_error("Sending error", exc) from exc
    if sent <= 0:
        raise SendError("Sending error: no data written")
    if sent < len(frame):
        raise SendError(f"Sending error: partial write ({sent}/{len(frame)} bytes)")

    logger.debug("Bytes sent in message: %d", sent)
    return sent


def receive_response(
    connection: Connection,
    buffer: bytearray | memoryview,
    capacity: int | None = None,
    *,
    logger: logging.Logger | None = None,
) -> int:
    """
    Reads the response with exactly one receive call.

    The received bytes are in ``buffer[:nbytes]``. Nothing past that bound must be used:
    the remaining part of the buffer is left untouched.

    Parameters:
        connection: The connection to read from.
        buffer: A pre-allocated writable buffer.
        capacity: The maximum number of bytes to read. Defaults to the buffer size.
        logger: If given, the logger instance to use.

    Raises:
        ValueError: Invalid `capacity`.
        ReceiveError: the peer closed the connection without sending data, or the read failed.

    Returns:
        the number of bytes received.
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    with memoryview(buffer) as view:
        if view.readonly:
            raise ValueError("buffer is read-only")
        if capacity is None:
            capacity = view.nbytes
        if not 0 < capacity <= view.nbytes:
            raise ValueError(f"capacity must be between 1 and {view.nbytes}, got {capacity}")

        logger.info("Starting to receive")
        try:
            nbytes = connection.recv_into(view, capacity)
        except OSError as exc:
            raise ReceiveError.from_os_error("Failed on recv", exc) from exc

    if nbytes <= 0:
        raise ReceiveError(f"Failed on recv. Code {nbytes}")
    logger.debug("Recv succeeded. Bytes received: %d", nbytes)
    return nbytes
