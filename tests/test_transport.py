"""
Tests for the REST transport against a real local socket.

A scripted server thread answers a single connection, so stalls and slow
bodies happen on the wire rather than in a mock.
"""

import json
import socket
import threading
import time

import pytest
import requests

from qdrant_sdk import QdrantClient
from qdrant_sdk.exceptions import RequestTimeoutError
from qdrant_sdk.middleware import Request
from qdrant_sdk.transport import Transport

LOCKS_BODY = json.dumps(
    {"result": {"write": False, "error_message": None}, "status": "ok", "time": 0.0}
).encode()


def response_head(content_length):
    return (
        "HTTP/1.1 200 OK\r\n"
        "Content-Type: application/json\r\n"
        f"Content-Length: {content_length}\r\n"
        "\r\n"
    ).encode()


def stall_mid_body(conn, stop):
    """Send the headers and part of the body, then go quiet."""
    conn.sendall(response_head(100) + b'{"result":')
    stop.wait(5)


def trickle_body(conn, stop):
    """Send the body one byte at a time, each well within the read timeout."""
    conn.sendall(response_head(len(LOCKS_BODY)))
    for i in range(len(LOCKS_BODY)):
        if stop.wait(0.2):
            return
        conn.sendall(LOCKS_BODY[i:i + 1])


def answer_at_once(conn, stop):
    conn.sendall(response_head(len(LOCKS_BODY)) + LOCKS_BODY)


@pytest.fixture
def http_server():
    """Start a one-shot HTTP server and return its port."""
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    stop = threading.Event()
    threads = []

    def serve(respond):
        def run():
            try:
                conn, _ = listener.accept()
            except OSError:
                return
            with conn:
                conn.recv(65536)
                try:
                    respond(conn, stop)
                except OSError:
                    pass  # client hung up

        thread = threading.Thread(target=run, daemon=True)
        thread.start()
        threads.append(thread)
        return listener.getsockname()[1]

    yield serve

    stop.set()
    listener.close()
    for thread in threads:
        thread.join(timeout=5)


def local_client(port, timeout):
    return QdrantClient(host="127.0.0.1", port=port, timeout=timeout, check_compatibility=False)


class TestBodyReadTimeout:
    """Test timeouts that fire after the headers have arrived."""

    def test_stalled_body_is_a_timeout(self, http_server):
        """Test that a body read hitting the socket timeout is not a network error."""
        port = http_server(stall_mid_body)
        transport = Transport(f"http://127.0.0.1:{port}", [])

        with pytest.raises(requests.ReadTimeout):
            transport._send(Request(method="GET", url=f"http://127.0.0.1:{port}/locks", timeout=0.3))
        transport.close()

    def test_stalled_body_raises_timeout_error(self, http_server):
        port = http_server(stall_mid_body)
        client = local_client(port, timeout=0.5)

        with pytest.raises(RequestTimeoutError):
            client.get_locks()
        client.close()

    def test_trickling_body_hits_deadline(self, http_server):
        """Test that the timeout bounds the whole call, not each socket read."""
        port = http_server(trickle_body)
        client = local_client(port, timeout=0.5)

        started = time.monotonic()
        with pytest.raises(RequestTimeoutError):
            client.get_locks()
        elapsed = time.monotonic() - started

        assert elapsed < 2.0
        client.close()

    def test_fast_response_within_deadline(self, http_server):
        port = http_server(answer_at_once)
        client = local_client(port, timeout=5.0)

        assert client.get_locks() == {"write": False, "error_message": None}
        client.close()

    def test_no_timeout_reads_whole_body(self, http_server):
        port = http_server(answer_at_once)
        client = local_client(port, timeout=None)

        assert client.get_locks()["write"] is False
        client.close()
