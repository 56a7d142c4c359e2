"""Tests for translating raw control input into controller operations."""

import pytest

from src.clipdeck.config.settings import AttachOptions
from src.clipdeck.interaction.handlers import ScrubberInput


@pytest.fixture
def scrubber(controller):
    return ScrubberInput(controller)


class TestSliderDrag:
    """Test press/drag/release of the scrubber."""

    def test_drag_while_playing_resumes(self, controller, scrubber, ten_second_subject):
        controller.attach(ten_second_subject, AttachOptions(play=True))

        scrubber.press_slider()
        assert controller.is_paused
        assert scrubber.dragging

        scrubber.drag_slider(40)
        assert controller.current_time == 4.0

        scrubber.release_slider()
        assert controller.is_playing
        assert controller.current_time == 4.0
        assert not scrubber.dragging

    def test_drag_while_stopped_stays_stopped(
        self, controller, scrubber, ten_second_subject
    ):
        controller.attach(ten_second_subject)

        scrubber.scrub_to("75")

        assert controller.is_stopped
        assert controller.current_time == 7.5

    def test_release_without_press_is_noop(self, controller, scrubber, ten_second_subject):
        controller.attach(ten_second_subject)
        scrubber.release_slider()
        assert controller.is_stopped

    def test_repeated_press_keeps_first_state(
        self, controller, scrubber, ten_second_subject
    ):
        controller.attach(ten_second_subject, AttachOptions(play=True))

        scrubber.press_slider()
        scrubber.press_slider()
        scrubber.release_slider()

        assert controller.is_playing

    def test_scrub_event_order(self, controller, recorder, scrubber, ten_second_subject):
        controller.attach(ten_second_subject, AttachOptions(play=True))
        recorder.clear()

        scrubber.scrub_to(20)

        assert recorder.types == ["PAUSE", "CHANGE_PERCENTAGE", "CHANGE_TIME", "PLAY"]

    def test_scrub_without_subject(self, controller, scrubber, recorder):
        scrubber.scrub_to(50)
        assert recorder.events == []


class TestButtons:
    """Test play/stop buttons."""

    def test_play_button_toggles(self, controller, scrubber, ten_second_subject):
        controller.attach(ten_second_subject)

        scrubber.click_play_button()
        assert controller.is_playing
        scrubber.click_play_button()
        assert controller.is_paused
        scrubber.click_play_button()
        assert controller.is_playing

    def test_stop_button(self, controller, scrubber, ten_second_subject):
        controller.attach(ten_second_subject, AttachOptions(play=True, at_time=3))

        scrubber.click_stop_button()

        assert controller.is_stopped
        assert controller.current_time == 0.0


class TestChangeSelection:
    """Test dropdown selection parsing."""

    def test_numeric_text(self, controller, scrubber, three_clip_subject):
        controller.attach(three_clip_subject)

        assert scrubber.change_selection("2") is True
        assert controller.current_track.name == "Jump"

    def test_integer(self, controller, scrubber, three_clip_subject):
        controller.attach(three_clip_subject)

        assert scrubber.change_selection(1) is True
        assert controller.current_track_index == 1

    @pytest.mark.parametrize("raw", ["abc", "", "1.5", None, "-1", -2])
    def test_invalid_input_ignored(self, controller, scrubber, three_clip_subject, raw):
        controller.attach(three_clip_subject)

        assert scrubber.change_selection(raw) is False
        assert controller.current_track_index == 0

    def test_out_of_range_ignored(self, controller, scrubber, three_clip_subject):
        controller.attach(three_clip_subject)

        assert scrubber.change_selection("9") is False
        assert controller.current_track_index == 0

    def test_without_subject(self, scrubber):
        assert scrubber.change_selection("0") is False
