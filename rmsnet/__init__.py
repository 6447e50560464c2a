"""Remote management of processes over TCP: a server and an interactive client."""

__version__ = "0.1.0"
__all__ = ["protocol", "history", "server", "client"]