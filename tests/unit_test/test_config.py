from __future__ import annotations

import dataclasses

from textclient.config import Action, Configuration, validate_port
from textclient.constants import DEFAULT_HOST, DEFAULT_PORT
from textclient.exceptions import ArgumentError

import pytest


class TestAction:
    @pytest.mark.parametrize(
        ["keyword", "expected_action"],
        [
            pytest.param("uppercase", Action.UPPERCASE),
            pytest.param("lowercase", Action.LOWERCASE),
            pytest.param("reverse", Action.REVERSE),
            pytest.param("title-case", Action.TITLE_CASE),
            pytest.param("shuffle", Action.SHUFFLE),
        ],
    )
    def test____parse____recognized_keyword(self, keyword: str, expected_action: Action) -> None:
        # Arrange

        # Act
        action = Action.parse(keyword)

        # Assert
        assert action is expected_action
        assert str(action) == keyword

    @pytest.mark.parametrize("keyword", ["UPPERCASE", "Reverse", "title_case", "titlecase", " shuffle", "", "capitalize"])
    def test____parse____unrecognized_keyword(self, keyword: str) -> None:
        # Arrange

        # Act & Assert
        with pytest.raises(ArgumentError, match=r"^Unrecognized action: .+$") as exc_info:
            Action.parse(keyword)

        assert exc_info.value.__cause__ is None
        assert exc_info.value.__suppress_context__


class TestValidatePort:
    @pytest.mark.parametrize("port", ["0", "80", "8080", "65535", "00080"])
    def test____validate_port____valid(self, port: str) -> None:
        assert validate_port(port) == port

    @pytest.mark.parametrize("port", ["", "80a", "-1", "+80", " 80", "80 ", "8.0", "0x50", "١٢"])
    def test____validate_port____non_digit(self, port: str) -> None:
        with pytest.raises(ArgumentError, match=r"^Incorrect port number usage"):
            validate_port(port)

    @pytest.mark.parametrize("port", ["65536", "99999", "123456789", "000065536", "9" * 5000])
    def test____validate_port____out_of_range(self, port: str) -> None:
        with pytest.raises(ArgumentError, match=r"Please specify a port in range"):
            validate_port(port)


class TestConfiguration:
    def test____dunder_init____default_values(self) -> None:
        # Arrange

        # Act
        config = Configuration(action=Action.REVERSE, message=b"abc")

        # Assert
        assert config.host == DEFAULT_HOST
        assert config.port == DEFAULT_PORT
        assert config.action is Action.REVERSE
        assert config.message == b"abc"

    def test____dunder_init____action_keyword(self) -> None:
        # Arrange

        # Act
        config = Configuration(action="title-case", message=b"")  # type: ignore[arg-type]

        # Assert
        assert config.action is Action.TITLE_CASE

    def test____dunder_init____message_is_copied_as_bytes(self) -> None:
        # Arrange
        message = bytearray(b"hello")

        # Act
        config = Configuration(action=Action.UPPERCASE, message=message)  # type: ignore[arg-type]
        message[:] = b"world"

        # Assert
        assert type(config.message) is bytes
        assert config.message == b"hello"

    def test____dunder_init____message_must_be_bytes(self) -> None:
        with pytest.raises(TypeError, match=r"^message must be a bytes-like object"):
            Configuration(action=Action.UPPERCASE, message="hello")  # type: ignore[arg-type]

    def test____dunder_init____invalid_action(self) -> None:
        with pytest.raises(ArgumentError, match=r"^Unrecognized action"):
            Configuration(action="invert", message=b"hello")  # type: ignore[arg-type]

    @pytest.mark.parametrize("port", ["http", "65536", "", "9" * 5000])
    def test____dunder_init____invalid_port(self, port: str) -> None:
        with pytest.raises(ArgumentError):
            Configuration(action=Action.UPPERCASE, message=b"hello", port=port)

    def test____dunder_init____empty_host(self) -> None:
        with pytest.raises(ArgumentError, match=r"^Host must not be empty$"):
            Configuration(action=Action.UPPERCASE, message=b"hello", host="")

    def test____immutable(self) -> None:
        # Arrange
        config = Configuration(action=Action.UPPERCASE, message=b"hello")

        # Act & Assert
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.host = "example.com"  # type: ignore[misc]
