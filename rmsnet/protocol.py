"""Wire format and shared helpers for the remote management protocol."""

from __future__ import annotations

import struct
from dataclasses import dataclass

SERVER_IP = "127.0.0.1"
SERVER_PORT = 6500
MAX_CLIENTS = 50
DATABASE = "DATABASE.txt"
INPUT_BUFF = 100
OUTPUT_BUFF = 200
MAX_COMMANDS = 100

GREEN = "\033[1;32m"
BLUE = "\x1b[034;1m"
RED = "\x1b[031m"
NORMAL = "\x1b[0m"

_LAYOUT = struct.Struct(f"<{INPUT_BUFF}s{INPUT_BUFF}s{OUTPUT_BUFF}si")
PACKET_SIZE = _LAYOUT.size

_HELP_RULE = "-" * 88

_HELP_MENU = (
    f"\n{_HELP_RULE}\n"
    "COMMAND                          DESCRIPTION\n"
    f"{_HELP_RULE}\n"
    "get-mem        <process-name>  : Gets the Memory Usage of a Given Process\n"
    "get-cpu-usage  <process-name>  : Gets the CPU Usage of a Given Process\n"
    "get-ports-used <process-name>  : Gets the Socket Ports Used by a Given Process\n"
    "get-open-fd    <process-name>  : Gets the Open File Descriptors of a Given Process\n"
    "kill           <process-name>  : Kills the Given Process\n"
    "history                        : Shows Commands History\n"
    "exit                           : Exits from Current Application\n"
    "help                           : Displays this Menu\n"
    f"{_HELP_RULE}\n\n"
)


def _encode_field(text: str, size: int) -> bytes:
    """Encode text to fit a NUL-terminated field of ``size`` bytes."""
    return text.encode("utf-8")[: size - 1]


def _decode_field(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")


@dataclass
class Packet:
    """One request or response exchanged between client and server."""

    command: str = ""
    process: str = ""
    output: str = ""
    process_id: int = 0

    def pack(self) -> bytes:
        """Serialise to the fixed-size wire layout; long fields are truncated."""
        return _LAYOUT.pack(
            _encode_field(self.command, INPUT_BUFF),
            _encode_field(self.process, INPUT_BUFF),
            _encode_field(self.output, OUTPUT_BUFF),
            self.process_id,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "Packet":
        """Build a packet from exactly PACKET_SIZE bytes."""
        if len(data) != PACKET_SIZE:
            raise ValueError(
                f"packet must be {PACKET_SIZE} bytes, got {len(data)}"
            )
        command, process, output, process_id = _LAYOUT.unpack(data)
        return cls(
            command=_decode_field(command),
            process=_decode_field(process),
            output=_decode_field(output),
            process_id=process_id,
        )


def parse_command(line: str) -> tuple[str, str]:
    """Split a request line at its first space into command and process name."""
    command, _, process = line.partition(" ")
    return command, process


def colored(text: str, color: str) -> str:
    """Wrap text in a terminal colour sequence and a reset."""
    return f"{color}{text}{NORMAL}"


def help_menu() -> str:
    """Return the table of supported commands."""
    return _HELP_MENU