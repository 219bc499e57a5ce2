"""Thin HTTP helpers for the chat-completion endpoint."""
from __future__ import annotations

import http.client
import json
import logging
import socket
import urllib.parse
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from config import API_BASE_URL, CONNECT_TIMEOUT_SEC, READ_TIMEOUT_SEC
from translator.errors import (
    AuthError,
    HttpError,
    ParseError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    TransportError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    status: int
    body: str


Transport = Callable[..., HttpResponse]


def _request_target(parsed: urllib.parse.SplitResult) -> str:
    target = parsed.path or "/"
    if parsed.query:
        target = f"{target}?{parsed.query}"
    return target


def post_json(
    url: str,
    payload: Dict[str, Any],
    headers: Optional[Dict[str, str]] = None,
    connect_timeout: float = CONNECT_TIMEOUT_SEC,
    read_timeout: float = READ_TIMEOUT_SEC,
) -> HttpResponse:
    """
    Perform a JSON POST request with the standard library.

    Connecting and reading use separate timeouts. Any status code is returned
    as-is; only transport failures raise. The connection is always closed.
    """
    parsed = urllib.parse.urlsplit(url)
    if parsed.scheme == "https":
        connection_cls = http.client.HTTPSConnection
    elif parsed.scheme == "http":
        connection_cls = http.client.HTTPConnection
    else:
        raise TransportError(f"Unsupported URL scheme: {url}")

    data = json.dumps(payload, ensure_ascii=False).encode("utf-8")
    req_headers = {"Content-Type": "application/json"}
    if headers:
        req_headers.update(headers)

    connection = connection_cls(parsed.hostname, parsed.port, timeout=connect_timeout)
    try:
        connection.connect()
        connection.sock.settimeout(read_timeout)
        connection.request("POST", _request_target(parsed), body=data, headers=req_headers)
        response = connection.getresponse()
        charset = response.headers.get_content_charset() or "utf-8"
        body = response.read().decode(charset, errors="replace")
        return HttpResponse(status=response.status, body=body)
    except (socket.timeout, TimeoutError) as exc:
        raise RequestTimeoutError(str(exc) or "timed out") from exc
    except (OSError, http.client.HTTPException) as exc:
        raise TransportError(str(exc) or type(exc).__name__) from exc
    finally:
        connection.close()


def build_headers(api_key: str) -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
    }


def raise_for_status(response: HttpResponse) -> None:
    """Map a non-200 status onto the matching API error."""
    status = response.status
    if status == 200:
        return
    if status == 401:
        raise AuthError(status)
    if status == 429:
        raise RateLimitError(status)
    if status >= 500:
        raise ServerError(status)
    raise HttpError(status, response.body)


def parse_chat_response(body: str) -> str:
    """Extract `choices[0].message.content` from a chat-completion body."""
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as exc:
        raise ParseError() from exc

    if not isinstance(data, dict):
        raise ParseError()
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        raise ParseError()
    first_choice = choices[0]
    if not isinstance(first_choice, dict):
        raise ParseError()
    message = first_choice.get("message")
    if not isinstance(message, dict):
        raise ParseError()
    content = message.get("content")
    if not isinstance(content, str):
        raise ParseError()
    return content.strip()


def call_chat_completion(
    payload: Dict[str, Any],
    api_key: str,
    transport: Transport = post_json,
    url: str = API_BASE_URL,
) -> str:
    """Send one chat-completion request and return the stripped reply text."""
    response = transport(
        url,
        payload,
        headers=build_headers(api_key),
        connect_timeout=CONNECT_TIMEOUT_SEC,
        read_timeout=READ_TIMEOUT_SEC,
    )
    logger.debug("Chat completion answered with HTTP %s", response.status)
    raise_for_status(response)
    return parse_chat_response(response.body)
