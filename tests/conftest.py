"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from src.clipdeck.config.settings import ControlsConfig
from src.clipdeck.interaction.events import EventBus
from src.clipdeck.interaction.playback import PlaybackController

from tests.fakes import (
    ALL_EVENTS,
    EventRecorder,
    FakeClip,
    FakeEngine,
    FakeServer,
    FakeSubject,
    FixedClock,
)


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def engines():
    """Every engine created by the controller fixture, in creation order."""
    return []


@pytest.fixture
def make_controller(clock, engines):
    """Factory building controllers wired to fake engines and a fixed clock."""

    def factory(**config_kwargs) -> PlaybackController:
        def engine_factory(subject):
            engine = FakeEngine(subject)
            engines.append(engine)
            return engine

        return PlaybackController(
            ControlsConfig(**config_kwargs),
            event_bus=EventBus(name="test"),
            engine_factory=engine_factory,
            clock=clock,
        )

    return factory


@pytest.fixture
def controller(make_controller):
    return make_controller()


@pytest.fixture
def recorder(controller):
    """Recorder subscribed to every standard controller event."""
    rec = EventRecorder()
    for name in ALL_EVENTS:
        controller.on(name, rec)
    return rec


@pytest.fixture
def ten_second_subject():
    return FakeSubject([FakeClip(name="Idle", duration=10.0, tracks=["a", "b"])])


@pytest.fixture
def three_clip_subject():
    return FakeSubject(
        [
            FakeClip(name="Walk", duration=2.0, tracks=["hips"], uuid="walk-1"),
            FakeClip(name="Run", duration=1.5, tracks=["hips", "legs"], uuid="run-1"),
            FakeClip(name="Jump", duration=0.8, uuid="jump-1"),
        ]
    )


@pytest.fixture
def fake_server():
    return FakeServer()
