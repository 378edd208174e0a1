#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import socket
import socketserver

logger = logging.getLogger("echo_server")


class EchoRequestHandler(socketserver.BaseRequestHandler):
    request: socket.socket

    def handle(self) -> None:
        data: bytes = self.request.recv(65536)
        logger.info("%s sent %r", self.client_address, data)
        if data:
            self.request.sendall(data)


def main() -> None:
    parser = argparse.ArgumentParser(formatter_class=argparse.ArgumentDefaultsHelpFormatter)

    parser.add_argument(
        "-v",
        "--verbose",
        dest="log_level",
        action="store_const",
        const="DEBUG",
        default="INFO",
        help="Increase verbose level",
    )
    parser.add_argument(
        "-p",
        "--port",
        dest="port",
        type=int,
        default=8080,
    )

    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level), format="[ %(levelname)s ] [ %(name)s ] %(message)s")

    with socketserver.TCPServer(("localhost", args.port), EchoRequestHandler) as server:
        logger.info("Listening on %s", server.server_address)
        server.serve_forever()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        pass
