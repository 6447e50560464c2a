import socket
import threading

import pytest

from rmsnet.history import CommandLog
from rmsnet.protocol import PACKET_SIZE, Packet
from rmsnet.server import (
    RequestHandler,
    build_query,
    find_process_id,
    main,
    run_shell,
    serve_client,
)

MISSING = "zzqq-no-such"


def _recv_all(sock, size):
    data = bytearray()
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        if not chunk:
            break
        data.extend(chunk)
    return bytes(data)


@pytest.mark.parametrize(
    "command, expected",
    [
        ("get-mem", "pmap -x 42 | tail -1 | awk '{print $3}'"),
        ("get-cpu-usage", "ps -p 42 -o %cpu | tail -1"),
        ("get-ports-used", "lsof -i -P | grep 42 | awk '{print $8,$9}'"),
        ("get-open-fd", "lsof -p 42 | awk '{print $4}'"),
    ],
)
def test_build_query_pipelines(command, expected):
    assert build_query(command, 42) == expected


@pytest.mark.parametrize("command", ["kill", "history", "bogus", ""])
def test_build_query_none_for_other_commands(command):
    assert build_query(command, 42) is None


def test_find_process_id_empty_name():
    assert find_process_id("") == 0


def test_find_process_id_missing_process():
    assert find_process_id(MISSING) == 0


def test_run_shell_captures_stdout():
    assert run_shell("echo hello") == "hello\n"


def test_run_shell_discards_stderr():
    assert run_shell("echo oops 1>&2") == ""


@pytest.fixture
def log(tmp_path):
    return CommandLog(tmp_path / "db.txt", "127.0.0.1", 4000)


def test_handle_invalid_command(log):
    reply = RequestHandler(log).handle(Packet(command="bogus", process=MISSING))
    assert reply.output == "Invalid Command\n"
    assert reply.command == "bogus"
    assert reply.process == MISSING
    assert reply.process_id == 0


def test_handle_kill_missing_process_is_invalid(log):
    reply = RequestHandler(log).handle(Packet(command="kill", process=MISSING))
    assert reply.output == "Invalid Process\n"


def test_handle_history_includes_itself(log):
    handler = RequestHandler(log)
    handler.handle(Packet(command="bogus", process=MISSING))
    reply = handler.handle(Packet(command="history", process=""))
    assert reply.output == log.render()
    assert reply.output.splitlines() == [f"1. bogus {MISSING}", "2. history "]


def test_handle_records_to_database(log):
    RequestHandler(log).handle(Packet(command="bogus", process=MISSING))
    text = log.path.read_text(encoding="utf-8")
    assert text.startswith(
        "Commands History of Client with IP & Port -> 127.0.0.1 & 4000: \n"
    )
    assert text.endswith(f"1. bogus {MISSING}\n")
    assert len(log) == 1


def test_serve_client_round_trip(tmp_path, capsys):
    database = tmp_path / "db.txt"
    ours, theirs = socket.socketpair()
    worker = threading.Thread(
        target=serve_client, args=(theirs, ("127.0.0.1", 5555), database)
    )
    worker.start()
    with ours:
        ours.sendall(Packet(command="bogus", process=MISSING).pack())
        reply = Packet.unpack(_recv_all(ours, PACKET_SIZE))
    worker.join(timeout=10)

    assert not worker.is_alive()
    assert reply.output == "Invalid Command\n"
    assert database.read_text(encoding="utf-8").startswith(
        "Commands History of Client with IP & Port -> 127.0.0.1 & 5555: \n"
    )
    assert "127.0.0.1:5555 has been Disconnected." in capsys.readouterr().out


def test_serve_client_ignores_partial_packet(tmp_path):
    database = tmp_path / "db.txt"
    ours, theirs = socket.socketpair()
    with ours:
        ours.sendall(b"\0" * (PACKET_SIZE // 2))
    with theirs:
        serve_client(theirs, ("127.0.0.1", 5556), database)

    assert not database.exists()


def test_main_rejects_bad_port():
    with pytest.raises(SystemExit):
        main(["--port", "not-a-port"])


def test_main_reports_bind_failure(tmp_path):
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as busy:
        busy.bind(("127.0.0.1", 0))
        busy.listen(1)
        port = busy.getsockname()[1]
        result = main(
            ["--host", "127.0.0.1", "--port", str(port), "--database", str(tmp_path / "db.txt")]
        )
    assert result == 1