from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from socket import AF_INET, AF_INET6, IPPROTO_TCP, SOCK_STREAM, socket as Socket
from typing import TYPE_CHECKING

from textclient.connection import Connection

import pytest

if TYPE_CHECKING:
    from unittest.mock import MagicMock

    from pytest_mock import MockerFixture


@pytest.fixture
def mock_socket_factory(mocker: MockerFixture) -> Callable[..., MagicMock]:
    fileno_counter = itertools.count()

    def factory(family: int = AF_INET, type: int = SOCK_STREAM, proto: int = IPPROTO_TCP) -> MagicMock:
        mock_socket = mocker.NonCallableMagicMock(spec=Socket)
        mock_socket.family = family
        mock_socket.type = type
        mock_socket.proto = proto
        mock_socket.fileno.return_value = 123 + next(fileno_counter)

        def close_side_effect() -> None:
            mock_socket.fileno.return_value = -1

        mock_socket.close.side_effect = close_side_effect
        mock_socket.connect.return_value = None
        mock_socket.shutdown.return_value = None
        mock_socket.getpeername.return_value = ("127.0.0.1", 8080) if family != AF_INET6 else ("::1", 8080, 0, 0)
        return mock_socket

    return factory


@pytest.fixture
def mock_tcp_socket(mock_socket_factory: Callable[..., MagicMock]) -> MagicMock:
    return mock_socket_factory()


@pytest.fixture
def mock_connection(mocker: MockerFixture) -> MagicMock:
    mock_connection = mocker.NonCallableMagicMock(spec=Connection)
    mock_connection.send.side_effect = lambda data: len(data)
    mock_connection.is_closed.return_value = False
    return mock_connection


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("textclient.tests")
