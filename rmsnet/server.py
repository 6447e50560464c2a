"""Remote management server: answers process queries sent by clients."""

from __future__ import annotations

import argparse
import os
import re
import signal
import socket
import subprocess
import sys
import threading

from rmsnet.history import CommandLog
from rmsnet.protocol import (
    BLUE,
    DATABASE,
    MAX_CLIENTS,
    PACKET_SIZE,
    SERVER_IP,
    SERVER_PORT,
    Packet,
    colored,
)

_PROMPT = "RMS SERVER: "
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

_QUERIES = {
    "get-mem": "pmap -x {pid} | tail -1 | awk '{{print $3}}'",
    "get-cpu-usage": "ps -p {pid} -o %cpu | tail -1",
    "get-ports-used": "lsof -i -P | grep {pid} | awk '{{print $8,$9}}'",
    "get-open-fd": "lsof -p {pid} | awk '{{print $4}}'",
}


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def find_process_id(name: str) -> int:
    """Return the first process id whose name matches, or 0 if there is none."""
    if not name:
        return 0
    try:
        result = subprocess.run(
            ["pgrep", "--", name],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            errors="replace",
            check=False,
        )
    except OSError:
        return 0
    first_line = result.stdout.split("\n", 1)[0]
    return _leading_int(first_line)


def run_shell(command: str) -> str:
    """Run a shell pipeline and return what it wrote to standard output."""
    result = subprocess.run(
        command,
        shell=True,
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        text=True,
        errors="replace",
        check=False,
    )
    return result.stdout


def build_query(command: str, pid: int) -> str | None:
    """Return the shell pipeline answering a query command, or None for others."""
    template = _QUERIES.get(command)
    return template.format(pid=pid) if template is not None else None


class RequestHandler:
    """Turns one client's request packets into response packets."""

    def __init__(self, log: CommandLog):
        self.log = log

    def handle(self, packet: Packet) -> Packet:
        """Record the request, carry it out and return the response."""
        self.log.record(packet.command, packet.process)
        pid = find_process_id(packet.process)
        command = packet.command

        query = build_query(command, pid)
        if query is not None:
            output = run_shell(query)
        elif command == "kill":
            output = self._kill(packet.process, pid)
        elif command == "history":
            output = self.log.render()
        else:
            output = "Invalid Command\n"

        if not output:
            output = "Invalid Process\n"

        return Packet(
            command=command,
            process=packet.process,
            output=output,
            process_id=pid,
        )

    @staticmethod
    def _kill(process: str, pid: int) -> str:
        if pid <= 0:
            return ""
        os.kill(pid, signal.SIGKILL)
        return f"Process {process} has been Killed\n"


def _receive_packet(conn: socket.socket) -> bytes | None:
    """Read one whole packet, or return None once the peer has gone."""
    chunks = bytearray()
    while len(chunks) < PACKET_SIZE:
        chunk = conn.recv(PACKET_SIZE - len(chunks))
        if not chunk:
            return None
        chunks.extend(chunk)
    return bytes(chunks)


def serve_client(conn: socket.socket, address, database=DATABASE) -> None:
    """Answer requests on one connection until the client disconnects."""
    ip, port = address[0], address[1]
    handler = RequestHandler(CommandLog(database, ip, port))
    with conn:
        try:
            while (data := _receive_packet(conn)) is not None:
                reply = handler.handle(Packet.unpack(data))
                conn.sendall(reply.pack())
        except OSError as exc:
            print(f"RMS SERVER: {exc}", file=sys.stderr)
            return
    print(
        colored(_PROMPT, BLUE)
        + f"Client with IP & Port -> {ip}:{port} has been Disconnected."
    )


def serve(host: str = SERVER_IP, port: int = SERVER_PORT, database=DATABASE) -> None:
    """Listen for clients and serve each on its own thread, forever."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
        listener.bind((host, port))
        print(colored(_PROMPT, BLUE) + f"Server IP & Port -> {host}:{port}.")
        listener.listen(MAX_CLIENTS)
        while True:
            conn, address = listener.accept()
            print(
                colored(_PROMPT, BLUE)
                + "Incoming Remote Request from Client with IP & Port -> "
                f"{address[0]}:{address[1]}."
            )
            threading.Thread(
                target=serve_client,
                args=(conn, address, database),
                daemon=True,
            ).start()


def main(argv=None) -> int:
    """Command-line entry point of the server."""
    parser = argparse.ArgumentParser(description="Remote management server.")
    parser.add_argument("--host", default=SERVER_IP, help="address to listen on")
    parser.add_argument("--port", type=int, default=SERVER_PORT, help="port to listen on")
    parser.add_argument("--database", default=DATABASE, help="command history file")
    args = parser.parse_args(argv)
    try:
        serve(args.host, args.port, args.database)
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        print(f"server: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())