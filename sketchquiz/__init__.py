"""Draw-and-guess quiz over TCP: wire protocol, server, client and LED control."""

__version__ = "0.1.0"