"""Outbound command channel to the IDE's remote-control listener."""

from __future__ import annotations

import logging
import socket
from contextlib import closing
from typing import Callable, Optional, Tuple

from ide_mcp.bridge.errors import CommandChannelError
from ide_mcp.bridge.schema import OutboundCommand

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 12345
DEFAULT_TIMEOUT = 5.0

Connector = Callable[..., socket.socket]


class CommandChannel:
    """
    Deliver single commands to the IDE over TCP.

    Every ``send()`` opens a new connection, writes the encoded command,
    and closes the connection again. Nothing is read back; the IDE gives no
    acknowledgement. Connections are never pooled or reused.
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        separator: str = "",
        connect: Connector = socket.create_connection,
    ):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.separator = separator
        self._connect = connect

    @property
    def address(self) -> Tuple[str, int]:
        return (self.host, self.port)

    def encode(self, command: str, *params: str) -> bytes:
        return OutboundCommand(command=command, params=list(params)).encode(self.separator)

    def send(self, command: str, *params: str) -> None:
        """
        Write one command to the IDE listener.

        Raises
        ------
        CommandChannelError
            If the command cannot be encoded as UTF-8, the connection cannot
            be established, or the write fails.
        """
        target = f"{self.host}:{self.port}"
        try:
            payload = self.encode(command, *params)
        except UnicodeError as exc:
            raise CommandChannelError(f"Cannot encode '{command}' for IDE at {target}: {exc}") from exc

        try:
            conn = self._connect(self.address, timeout=self.timeout)
        except OSError as exc:
            raise CommandChannelError(f"Cannot connect to IDE at {target}: {exc}") from exc

        with closing(conn):
            try:
                conn.sendall(payload)
            except OSError as exc:
                raise CommandChannelError(f"Failed to send '{command}' to IDE at {target}: {exc}") from exc

        logger.debug("Sent %r (%d bytes) to %s", command, len(payload), target)
