"""Shared fixtures for the translation plugin tests."""

import json
import logging

import pytest

from settings_manager import InMemorySettingsStore
from translator import KimiTranslationEngine, PluginContext
from translator.chat_api import HttpResponse


class FakeTransport:
    """Transport double returning scripted responses and recording every call."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def __call__(self, url, payload, headers=None, connect_timeout=None, read_timeout=None):
        self.calls.append(
            {
                "url": url,
                "payload": payload,
                "headers": headers,
                "connect_timeout": connect_timeout,
                "read_timeout": read_timeout,
            }
        )
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class RecordingEvent:
    """Stand-in for threading.Event that records waits instead of sleeping."""

    def __init__(self, interrupt_on_wait=False):
        self.waits = []
        self.interrupt_on_wait = interrupt_on_wait
        self._flag = False

    def wait(self, timeout=None):
        self.waits.append(timeout)
        return self._flag or self.interrupt_on_wait

    def set(self):
        self._flag = True

    def clear(self):
        self._flag = False
        self.interrupt_on_wait = False

    def is_set(self):
        return self._flag


def _chat_response(content, status=200):
    return HttpResponse(status=status, body=json.dumps({"choices": [{"message": {"content": content}}]}))


@pytest.fixture
def chat_response():
    """Build a successful chat-completion response with the given content."""
    return _chat_response


@pytest.fixture
def store():
    """In-memory settings with a configured API key."""
    return InMemorySettingsStore({"translator": {"api_key": "sk-test"}})


@pytest.fixture
def host_logger():
    return logging.getLogger("tests.host")


@pytest.fixture
def event():
    return RecordingEvent()


@pytest.fixture
def make_engine(store, host_logger, event):
    """Factory building an initialized engine around a scripted transport."""

    def _make(*outcomes, settings_store=None, interrupt_event=None):
        transport = FakeTransport(*outcomes) if outcomes else FakeTransport(_chat_response("ok"))
        context = PluginContext(settings_store or store, logger=host_logger)
        engine = KimiTranslationEngine(
            context,
            transport=transport,
            interrupt_event=interrupt_event or event,
        )
        engine.initialize()
        return engine, transport

    return _make
