import logging

import pytest

from flashdeck.config import Settings
from flashdeck.models import Card
from flashdeck.storage import MemoryStorage, SetStore


@pytest.fixture
def cards():
    return [
        Card(side1="Hello", side2="Hola"),
        Card(side1="Goodbye", side2="Adiós"),
        Card(side1="Thanks", side2="Gracias"),
    ]


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def store(memory_storage):
    s = SetStore(memory_storage)
    s.hydrate()
    return s


@pytest.fixture
def settings(tmp_path):
    return Settings(
        storage_file=tmp_path / "sets.json",
        storage_key="flashcardSets",
        default_separator="|",
        log_level="WARNING",
    )


class ScriptedInput:
    """Feeds prepared lines to code that calls ``input``; EOF when exhausted."""

    def __init__(self, lines):
        self.lines = list(lines)
        self.prompts = []

    def __call__(self, prompt=""):
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


@pytest.fixture
def scripted():
    return ScriptedInput


@pytest.fixture
def flashdeck_logs(caplog, monkeypatch):
    """Route ``flashdeck`` records to caplog even after ``setup_logging`` ran."""
    logger = logging.getLogger("flashdeck")
    monkeypatch.setattr(logger, "propagate", True)
    caplog.set_level(logging.WARNING, logger="flashdeck")
    return caplog
