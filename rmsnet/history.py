"""Per-client command history kept in memory and appended to a database file."""

from __future__ import annotations

import os
from pathlib import Path

from rmsnet.protocol import MAX_COMMANDS


class CommandLog:
    """Numbered command history of one connected client."""

    def __init__(self, path: str | os.PathLike, client_ip: str, client_port: int):
        self.path = Path(path)
        self.client_ip = client_ip
        self.client_port = client_port
        self._entries: list[str] = []
        self._count = 0
        self._header_written = False

    @property
    def entries(self) -> list[str]:
        """The stored history lines, oldest first."""
        return list(self._entries)

    def __len__(self) -> int:
        return self._count

    def record(self, command: str, process: str) -> str:
        """Number and store one command, append it to the database, return the line."""
        self._count += 1
        line = f"{self._count}. {command} {process}\n"
        with self.path.open("a", encoding="utf-8") as database:
            if not self._header_written:
                database.write(
                    "Commands History of Client with IP & Port -> "
                    f"{self.client_ip} & {self.client_port}: \n"
                )
                self._header_written = True
            database.write(line)
        if len(self._entries) < MAX_COMMANDS:
            self._entries.append(line)
        return line

    def render(self) -> str:
        """All stored history lines joined into one text."""
        return "".join(self._entries)