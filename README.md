# rmsnet

A small remote management service. A server listens on a TCP port and answers
questions about processes running on its host. The client is an interactive
prompt that sends those questions and prints the answers.

The server runs standard system tools (`pgrep`, `pmap`, `ps`, `lsof`,
`awk`, `tail`) through the shell, so it is meant for Linux hosts that have
them installed.

## Installation

```
pip install .
```

## Running

Start the server. By default it listens on 127.0.0.1, port 6500, and writes
its command history to `DATABASE.txt` in the working directory:

```
rmsnet-server
rmsnet-server --host 127.0.0.1 --port 6500 --database DATABASE.txt
```

Each connected client is served on its own thread.

In another terminal, connect with the client:

```
rmsnet-client
rmsnet-client --host 127.0.0.1 --port 6500
```

The client prints the command list and then reads commands from standard
input, one per line, until `exit` or the end of input.

## Commands

| Command                         | Description                                 |
|---------------------------------|---------------------------------------------|
| `get-mem <process-name>`        | Memory usage of a process                   |
| `get-cpu-usage <process-name>`  | CPU usage of a process                      |
| `get-ports-used <process-name>` | Socket ports used by a process              |
| `get-open-fd <process-name>`    | Open file descriptors of a process          |
| `kill <process-name>`           | Kills the process with SIGKILL              |
| `history`                       | Commands sent so far in this session        |
| `help`                          | Shows the command list (handled locally)    |
| `exit`                          | Leaves the client (handled locally)         |

The process is looked up by name with `pgrep`; the first matching id is used.
Unknown commands get `Invalid Command`. A command whose process cannot be
found, or whose query produces no output, gets `Invalid Process`.

## Command history

Each command a client sends is numbered and appended to the history file on
the server. The first entry of each session is preceded by a line giving the
client's address and port. The `history` command returns the lines of the
current session, keeping at most the first 100 of them.

## Library use

The pieces can also be used from Python:

- `rmsnet.protocol.Packet`: the fixed-size message exchanged on the wire,
  with `pack()` and `Packet.unpack(data)`; `PACKET_SIZE` is its length.
- `rmsnet.protocol.parse_command(line)`: splits a typed line at its first
  space into command and process name.
- `rmsnet.protocol.colored(text, color)` and `rmsnet.protocol.help_menu()`.
- `rmsnet.history.CommandLog(path, client_ip, client_port)`: `record(command,
  process)` stores and appends one command; `render()` returns the session
  history.
- `rmsnet.server.RequestHandler(log)`: `handle(packet)` turns a request packet
  into a response packet.
- `rmsnet.server.find_process_id(name)`, `run_shell(command)` and
  `build_query(command, pid)`: the process lookup and query helpers.
- `rmsnet.server.serve(host, port, database)` and
  `rmsnet.server.serve_client(conn, address, database)`: the listening loop and
  the per-connection loop.
- `rmsnet.client.interact(sock, lines, out)`: runs the client loop over any
  connected socket and source of input lines.

## What it does not do

There is no authentication or encryption: anyone who can reach the port can
query and kill processes. The server runs until interrupted and has no
shutdown command.

## Tests

```
pip install .[test]
pytest
```