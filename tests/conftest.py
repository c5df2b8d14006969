"""Shared fixtures: an in-memory stand-in for TCP connections to the IDE."""

from typing import List, Optional

import pytest

from ide_mcp.bridge.channel import CommandChannel


class FakeSocket:
    def __init__(self, fail_on_send: Optional[OSError] = None):
        self.sent: List[bytes] = []
        self.send_calls = 0
        self.close_calls = 0
        self._fail_on_send = fail_on_send

    def sendall(self, data: bytes) -> None:
        self.send_calls += 1
        if self._fail_on_send is not None:
            raise self._fail_on_send
        self.sent.append(data)

    def close(self) -> None:
        self.close_calls += 1


class FakeConnector:
    """Callable with the signature of ``socket.create_connection``."""

    def __init__(self):
        self.sockets: List[FakeSocket] = []
        self.addresses = []
        self.timeouts = []
        self.refuse: Optional[OSError] = None
        self.fail_on_send: Optional[OSError] = None

    def __call__(self, address, timeout=None):
        self.addresses.append(address)
        self.timeouts.append(timeout)
        if self.refuse is not None:
            raise self.refuse
        sock = FakeSocket(fail_on_send=self.fail_on_send)
        self.sockets.append(sock)
        return sock

    @property
    def payloads(self) -> List[bytes]:
        return [data for sock in self.sockets for data in sock.sent]


@pytest.fixture
def connector():
    return FakeConnector()


@pytest.fixture
def channel(connector):
    return CommandChannel(connect=connector)
