from __future__ import annotations

import socket
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import pytest

from ..fixtures.socket import SUPPORTED_FAMILIES, localhost_from_family, skip_if_family_unavailable
from .stub_server import StubServer


@pytest.fixture(params=SUPPORTED_FAMILIES, ids=lambda f: socket.AddressFamily(f).name)
def socket_family(request: pytest.FixtureRequest) -> int:
    family: int = request.param
    skip_if_family_unavailable(family)
    return family


@pytest.fixture
def localhost_ip(socket_family: int) -> str:
    return localhost_from_family(socket_family)


@pytest.fixture
def stub_server(socket_family: int, localhost_ip: str, request: pytest.FixtureRequest) -> Iterator[StubServer]:
    with (
        socket.socket(socket_family, socket.SOCK_STREAM) as listener,
        ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"pytest-textclient_{request.node.name}") as executor,
    ):
        listener.bind((localhost_ip, 0))
        listener.listen(1)
        listener.settimeout(5.0)
        yield StubServer(listener, executor)


@pytest.fixture
def unused_port(socket_family: int, localhost_ip: str) -> str:
    with socket.socket(socket_family, socket.SOCK_STREAM) as sock:
        sock.bind((localhost_ip, 0))
        port: Any = sock.getsockname()[1]
    return str(port)
