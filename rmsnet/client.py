"""Interactive client that sends management commands to the server."""

from __future__ import annotations

import argparse
import socket
import sys
from typing import Iterable, Iterator, TextIO

from rmsnet.protocol import (
    GREEN,
    PACKET_SIZE,
    SERVER_IP,
    SERVER_PORT,
    Packet,
    colored,
    help_menu,
    parse_command,
)

_REQUEST_PROMPT = "CLIENT REQUEST\t: "
_RESPONSE_PROMPT = "SERVER RESPONSE\t: "
_MULTILINE_COMMANDS = {"get-open-fd", "history"}


def _receive_exact(sock: socket.socket, size: int) -> bytes | None:
    data = bytearray()
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        if not chunk:
            return None
        data.extend(chunk)
    return bytes(data)


def _next_command(source: Iterator[str]) -> str | None:
    """Next non-blank line with leading whitespace removed, or None at the end."""
    for raw in source:
        line = raw.lstrip().rstrip("\r\n")
        if line:
            return line
    return None


def interact(sock: socket.socket, lines: Iterable[str], out: TextIO) -> None:
    """Read commands from lines, exchange them with the server, write replies to out."""
    source = iter(lines)
    while True:
        out.write(colored(_REQUEST_PROMPT, GREEN))
        out.flush()
        line = _next_command(source)
        if line is None:
            return
        if line == "help":
            out.write(help_menu())
            continue
        if line == "exit":
            out.write("\nINFO: Exited!\n")
            return

        command, process = parse_command(line)
        sock.sendall(Packet(command=command, process=process).pack())
        data = _receive_exact(sock, PACKET_SIZE)
        if data is None:
            raise ConnectionError("server closed the connection")
        reply = Packet.unpack(data)

        out.write(colored(_RESPONSE_PROMPT, GREEN))
        if reply.command in _MULTILINE_COMMANDS:
            out.write("\n")
        out.write(reply.output)


def main(argv=None) -> int:
    """Command-line entry point of the client."""
    parser = argparse.ArgumentParser(description="Remote management client.")
    parser.add_argument("--host", default=SERVER_IP, help="server address")
    parser.add_argument("--port", type=int, default=SERVER_PORT, help="server port")
    args = parser.parse_args(argv)

    try:
        sock = socket.create_connection((args.host, args.port))
    except OSError as exc:
        print(f"connect: {exc}", file=sys.stderr)
        return 1

    with sock:
        print("INFO: Connected to the Server.")
        print("\nSupported Commands for Remote Management:")
        sys.stdout.write(help_menu())
        print("INFO: Send a Command to Server & Server Will Respond Back with Output.\n")
        try:
            interact(sock, sys.stdin, sys.stdout)
        except ConnectionError as exc:
            print(f"recv: {exc}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())