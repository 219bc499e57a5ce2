"""Tests for the chat-completion HTTP helpers."""

import errno
import http.client
import json
import socket
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from translator.chat_api import (
    HttpResponse,
    build_headers,
    call_chat_completion,
    parse_chat_response,
    post_json,
    raise_for_status,
)
from translator.errors import (
    AuthError,
    HttpError,
    ParseError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    TransportError,
)


class _Handler(BaseHTTPRequestHandler):
    delay = 0.0

    def do_POST(self):
        length = int(self.headers.get("Content-Length", "0"))
        body = json.loads(self.rfile.read(length).decode("utf-8"))
        time.sleep(self.delay)
        reply = json.dumps(
            {
                "path": self.path,
                "authorization": self.headers.get("Authorization"),
                "content_type": self.headers.get("Content-Type"),
                "echo": body,
            },
            ensure_ascii=False,
        ).encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(reply)))
        self.end_headers()
        self.wfile.write(reply)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def server():
    """Start a local HTTP server and yield a factory for its URL."""
    handler = type("Handler", (_Handler,), {})
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    host, port = httpd.server_address
    yield handler, f"http://{host}:{port}/v1/chat/completions"
    httpd.shutdown()
    httpd.server_close()


class TestPostJson:
    def test_posts_json_body_and_headers(self, server):
        _, url = server
        response = post_json(url, {"text": "你好"}, headers={"Authorization": "Bearer sk-1"})

        assert response.status == 200
        data = json.loads(response.body)
        assert data["path"] == "/v1/chat/completions"
        assert data["authorization"] == "Bearer sk-1"
        assert data["content_type"] == "application/json"
        assert data["echo"] == {"text": "你好"}

    def test_slow_response_raises_timeout(self, server):
        handler, url = server
        handler.delay = 1.0
        with pytest.raises(RequestTimeoutError):
            post_json(url, {}, read_timeout=0.2)

    def test_connection_refused_is_transport_error(self):
        sock = socket.socket()
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
        sock.close()
        with pytest.raises(TransportError):
            post_json(f"http://127.0.0.1:{port}/", {}, connect_timeout=1.0)

    def test_connect_timeout_error_is_request_timeout(self, monkeypatch):
        def connect(self):
            raise TimeoutError(errno.ETIMEDOUT, "Connection timed out")

        monkeypatch.setattr(http.client.HTTPConnection, "connect", connect)
        with pytest.raises(RequestTimeoutError):
            post_json("http://127.0.0.1:9/", {})

    def test_unsupported_scheme(self):
        with pytest.raises(TransportError):
            post_json("ftp://example.com/", {})


class TestStatusMapping:
    def test_ok_passes(self):
        raise_for_status(HttpResponse(status=200, body=""))

    @pytest.mark.parametrize(
        "status, error_cls, message",
        [
            (401, AuthError, "API Key无效或已过期"),
            (429, RateLimitError, "请求过于频繁，请稍后再试"),
            (500, ServerError, "Kimi服务器错误，请稍后再试"),
            (502, ServerError, "Kimi服务器错误，请稍后再试"),
        ],
    )
    def test_known_statuses(self, status, error_cls, message):
        with pytest.raises(error_cls) as exc_info:
            raise_for_status(HttpResponse(status=status, body="ignored"))
        assert str(exc_info.value) == message
        assert exc_info.value.status_code == status

    @pytest.mark.parametrize("status", [400, 403, 404, 201])
    def test_other_statuses(self, status):
        with pytest.raises(HttpError) as exc_info:
            raise_for_status(HttpResponse(status=status, body='{"error": "nope"}'))
        assert str(exc_info.value) == f'HTTP错误 {status}: {{"error": "nope"}}'


class TestParseChatResponse:
    def test_content_is_stripped(self):
        body = json.dumps({"choices": [{"message": {"content": " 你好 "}}]})
        assert parse_chat_response(body) == "你好"

    @pytest.mark.parametrize(
        "body",
        [
            "not json",
            "[]",
            "{}",
            '{"choices": []}',
            '{"choices": ["x"]}',
            '{"choices": [{}]}',
            '{"choices": [{"message": {}}]}',
            '{"choices": [{"message": {"content": null}}]}',
            '{"choices": [{"message": {"content": 42}}]}',
        ],
    )
    def test_malformed_bodies(self, body):
        with pytest.raises(ParseError, match="无法解析API响应"):
            parse_chat_response(body)


def test_build_headers():
    assert build_headers("sk-9") == {
        "Content-Type": "application/json",
        "Authorization": "Bearer sk-9",
    }


def test_call_chat_completion_against_local_server(server):
    handler, url = server

    def transport(target, payload, headers=None, connect_timeout=None, read_timeout=None):
        response = post_json(target, payload, headers=headers)
        echoed = json.loads(response.body)
        content = f" {echoed['authorization']} "
        return HttpResponse(
            status=response.status,
            body=json.dumps({"choices": [{"message": {"content": content}}]}),
        )

    assert call_chat_completion({"model": "m"}, "sk-2", transport=transport, url=url) == "Bearer sk-2"
