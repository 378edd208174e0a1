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
"""Command-line interface module."""

from __future__ import annotations

__all__ = ["CommandLine", "main", "main_entry", "parse_arguments", "print_usage"]

import argparse
import dataclasses
import logging
import os
import sys
from collections.abc import Sequence
from typing import IO, BinaryIO, Final, NoReturn

from .config import Action, Configuration, validate_port
from .constants import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_RECEIVE_BUFSIZE
from .exceptions import ArgumentError, HelpRequested, TCPClientError
from .session import RequestSession

EXIT_SUCCESS: Final[int] = 0
EXIT_FAILURE: Final[int] = 1
EXIT_USAGE: Final[int] = 2

LOG_FORMAT: Final[str] = "[ %(levelname)s ] [ %(name)s ] %(message)s"

USAGE: Final[str] = f"""
Usage: tcp_client [--help] [-v] [-h HOST] [-p PORT] ACTION MESSAGE

Arguments:
   ACTION   Must be uppercase, lowercase, title-case,
            reverse, or shuffle.
   MESSAGE  Message to send to the server

Options:
   --help
   -v, --verbose
   --host HOSTNAME, -h HOSTNAME   (default: {DEFAULT_HOST})
   --port PORT, -p PORT           (default: {DEFAULT_PORT})
"""


@dataclasses.dataclass(frozen=True, slots=True)
class CommandLine:
    config: Configuration
    verbose: bool = False


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise ArgumentError(message)


def _port(value: str) -> str:
    try:
        return validate_port(value)
    except ArgumentError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="tcp_client", add_help=False, allow_abbrev=False)
    parser.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        action="store_true",
    )
    parser.add_argument(
        "-h",
        "--host",
        dest="host",
        default=DEFAULT_HOST,
    )
    parser.add_argument(
        "-p",
        "--port",
        dest="port",
        type=_port,
        default=DEFAULT_PORT,
    )
    parser.add_argument("positionals", nargs="*", metavar="ACTION MESSAGE")
    return parser


def parse_arguments(argv: Sequence[str]) -> CommandLine:
    """
    Builds the run configuration from the process arguments (without the program name).

    Raises:
        HelpRequested: ``--help`` is present, whatever the other arguments are.
        ArgumentError: Invalid command line.
    """
    if "--help" in argv:
        raise HelpRequested()

    args = _build_parser().parse_intermixed_args(list(argv))

    positionals: list[str] = args.positionals
    if len(positionals) != 2:
        raise ArgumentError("Incorrect number of arguments")
    action, message = positionals

    config = Configuration(
        host=args.host,
        port=args.port,
        action=Action.parse(action),
        message=os.fsencode(message),
    )
    return CommandLine(config, verbose=args.verbose)


def print_usage(file: IO[str] | None = None) -> None:
    if file is None:
        file = sys.stderr
    print(USAGE, file=file)


def main(argv: Sequence[str] | None = None, *, stdout: BinaryIO | None = None) -> int:
    """
    Runs the client and returns the process exit status.

    Nothing is written to `stdout` (default: :data:`sys.stdout`) unless a response has been received.
    """
    if argv is None:
        argv = sys.argv[1:]
    if stdout is None:
        stdout = sys.stdout.buffer

    logger = logging.getLogger(__package__)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.WARNING)
    try:
        return _run(argv, stdout, logger)
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)


def _run(argv: Sequence[str], stdout: BinaryIO, logger: logging.Logger) -> int:
    try:
        command_line = parse_arguments(argv)
    except HelpRequested:
        print_usage()
        return EXIT_USAGE
    except ArgumentError as exc:
        logger.error("%s", exc)
        print_usage()
        return EXIT_USAGE

    if command_line.verbose:
        logger.setLevel(logging.DEBUG)
        logger.debug("Setting verbose mode")

    config = command_line.config
    logger.debug("Host: %s", config.host)
    logger.debug("Port: %s", config.port)
    logger.debug("Action: %s", config.action)
    logger.debug("Message: %r", config.message)

    buffer = bytearray(DEFAULT_RECEIVE_BUFSIZE)
    try:
        with RequestSession(config, logger=logger) as session:
            session.connect()
            session.send_request()
            nbytes = session.receive_response(buffer)

            try:
                stdout.write(bytes(buffer[:nbytes]) + b"\n")
                stdout.flush()
            except OSError as exc:
                logger.error("write failed: %s", exc)
                return EXIT_FAILURE

            session.close()
    except TCPClientError as exc:
        logger.error("%s failed: %s", exc.phase, exc)
        return EXIT_FAILURE
    return EXIT_SUCCESS


def main_entry() -> NoReturn:
    sys.exit(main())
