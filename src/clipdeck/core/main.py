"""
ClipDeck - Main Entry Point.

This is the CLI entry point that uses tyro for argument parsing. It builds a
subject from ``NAME:SECONDS`` clip arguments and either plays it headless for a
number of frames or serves the viser playback panel.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

import tyro
import viser

from src.clipdeck.config.io import load_controls_config
from src.clipdeck.config.settings import AttachOptions, ControlsConfig
from src.clipdeck.interaction.events import Event, EventType
from src.clipdeck.interaction.playback import PlaybackController
from src.clipdeck.ui.layout import ViserPlaybackPanel
from src.infrastructure.animation.mixer import AnimatedSubject, AnimationClip

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """
    Setup logging configuration.

    Parameters
    ----------
    level : str
        Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def parse_clip_arg(arg: str) -> AnimationClip:
    """
    Parse ``"NAME:SECONDS"`` (or bare ``"SECONDS"``) into a clip.

    Raises
    ------
    ValueError
        If the duration is not a non-negative number
    """
    name, sep, seconds = arg.rpartition(":")
    if not sep:
        name, seconds = "", arg
    duration = float(seconds)
    if not duration >= 0.0:
        raise ValueError(f"Clip duration must be a non-negative number: {arg!r}")
    return AnimationClip(name=name.strip(), duration=duration, tracks=["root"])


def _log_event(event: Event) -> None:
    if event.payload is None:
        logger.info(f"Event {event.type}")
    else:
        logger.info(f"Event {event.type}: {event.payload}")


def main(
    clips: tuple[str, ...] = ("Walk:2.0", "Run:1.2", "Jump:0.8"),
    track: int | None = None,
    track_name: str | None = None,
    at_time: float | None = None,
    frames: int = 60,
    fps: float = 30.0,
    serve: bool = False,
    port: int = 8080,
    host: str = "0.0.0.0",
    config: Path | None = None,
    log_level: str = "INFO",
) -> None:
    """
    ClipDeck playback demo.

    Parameters
    ----------
    clips : tuple[str, ...]
        Clips as NAME:SECONDS, e.g. Walk:2.0 Run:1.2
    track : int | None
        Track index to select on attach (default: first track)
    track_name : str | None
        Track to switch to by name after attaching
    at_time : float | None
        Initial cursor position in seconds
    frames : int
        Number of frames to play in headless mode (default: 60)
    fps : float
        Frame rate of the playback loop (default: 30)
    serve : bool
        Serve the viser playback panel instead of running headless
    port : int
        Viser server port (default: 8080)
    host : str
        Host to bind to (default: 0.0.0.0)
    config : Path | None
        YAML controls configuration
    log_level : str
        Logging level: DEBUG, INFO, WARNING, ERROR (default: INFO)

    Examples
    --------
    Headless, two seconds of the Run clip:
        clipdeck --clips Walk:2 Run:1.5 --track 1 --frames 60

    Serve the panel:
        clipdeck --clips Walk:2 Run:1.5 --serve --port 8080
    """
    setup_logging(log_level)

    if fps <= 0:
        raise ValueError(f"fps must be positive, got {fps}")

    controls_config = load_controls_config(config) if config else ControlsConfig()
    subject = AnimatedSubject(
        name="demo", animations=[parse_clip_arg(arg) for arg in clips]
    )

    controller = PlaybackController(controls_config)
    for event_type in EventType:
        controller.on(event_type, _log_event)

    logger.info("=== ClipDeck ===")
    logger.info(f"Clips: {', '.join(clips)}")

    controller.attach(subject, AttachOptions(play=True, at_time=at_time, track_index=track))
    if track_name is not None:
        controller.select_track_by_name(track_name)

    if serve:
        _serve(controller, host, port, fps)
    else:
        _run_headless(controller, frames, fps)

    controller.detach()


def _run_headless(controller: PlaybackController, frames: int, fps: float) -> None:
    step = 1.0 / fps
    for frame in range(frames):
        controller.advance(step)
        logger.info(f"Frame {frame:4d}  {controller.get_current_time_display()}")


def _serve(controller: PlaybackController, host: str, port: int, fps: float) -> None:
    server = viser.ViserServer(host=host, port=port)
    panel = ViserPlaybackPanel(server, controller)
    logger.info(f"Serving playback panel on http://{host}:{port} (Ctrl+C to quit)")

    try:
        while True:
            panel.advance()
            time.sleep(1.0 / fps)
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.stop()


def cli() -> None:
    """Entry point for the installed script."""
    tyro.cli(main)


if __name__ == "__main__":
    cli()
