"""Shared pytest fixtures for vocabfilter tests.

Provides categories, a recorder for notifications, a state/controller
pair and an in-memory telemetry installed for the duration of a test.
"""

from __future__ import annotations

import pytest

from vocabfilter.controller import FilterController
from vocabfilter.models import Category, FilterCriteria
from vocabfilter.telemetry import Telemetry, get_telemetry, set_telemetry


class Recorder:
    """Callable that records every notification it receives."""

    def __init__(self) -> None:
        self.events: list = []

    def __call__(self, event) -> None:
        self.events.append(event)

    @property
    def count(self) -> int:
        return len(self.events)

    def fields(self) -> list[str]:
        return [e.field for e in self.events]


@pytest.fixture
def noun() -> Category:
    return Category(id=1, label="Noun", short_name="n")


@pytest.fixture
def verb() -> Category:
    return Category(id=2, label="Godan verb", short_name="v5")


@pytest.fixture
def controller() -> FilterController:
    """Controller over default criteria."""
    return FilterController(FilterCriteria())


@pytest.fixture
def field_events(controller) -> Recorder:
    recorder = Recorder()
    controller.state.subscribe(recorder)
    return recorder


@pytest.fixture
def filter_events(controller) -> Recorder:
    recorder = Recorder()
    controller.subscribe(recorder)
    return recorder


@pytest.fixture
def telemetry():
    """Install an in-memory Telemetry; yields (telemetry, exporter)."""
    previous = get_telemetry()
    tel, exporter = Telemetry.for_testing()
    set_telemetry(tel)
    yield tel, exporter
    set_telemetry(previous)
