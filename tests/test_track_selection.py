"""Tests for switching between the tracks of an attached subject."""

import pytest

from src.clipdeck.config.settings import AttachOptions
from src.shared.exceptions import IndexOutOfRangeError, NotAttachedError, TrackNotFoundError


class TestSelectTrack:
    """Test select_track."""

    @pytest.fixture
    def attached(self, controller, recorder, three_clip_subject):
        controller.attach(three_clip_subject)
        recorder.clear()
        return controller

    def test_select_other_track(self, attached, recorder):
        info = attached.select_track(1)

        assert info.name == "Run"
        assert attached.current_track_index == 1
        assert attached.duration_display == "00:01:50"
        assert attached.is_stopped
        assert recorder.types == ["ANIMATION_SELECTED", "ANIMATION_TRACK_CHANGED"]

        selection = recorder.payloads("ANIMATION_TRACK_CHANGED")[0]
        assert (selection.previous_index, selection.current_index) == (0, 1)
        assert selection.animation_info is info

    def test_reselect_same_track(self, attached, recorder):
        attached.select_track(0)

        assert recorder.types == ["ANIMATION_SELECTED"]

    def test_switch_while_playing_keeps_playing(self, attached, recorder):
        attached.play()
        attached.advance(0.5)
        old_action = attached.bound_action
        recorder.clear()

        attached.select_track(2)

        assert attached.is_playing
        assert attached.current_time == 0.0
        assert attached.bound_action is not old_action
        assert attached.bound_action.running
        assert old_action.running is False
        assert recorder.types == ["ANIMATION_SELECTED", "ANIMATION_TRACK_CHANGED", "PLAY"]

    def test_switch_while_paused_stops(self, attached):
        attached.play()
        attached.pause()

        attached.select_track(1)

        assert attached.is_stopped
        assert attached.current_time == 0.0

    def test_switch_resets_cursor(self, attached):
        attached.set_time(1.2)
        attached.select_track(1)
        assert attached.get_current_time_display() == "00:00:00 / 00:01:50"

    def test_returning_to_a_track_rewinds_it(self, attached):
        attached.set_time(1.5)
        attached.select_track(1)
        attached.select_track(0)

        assert attached.current_time == 0.0

    @pytest.mark.parametrize("index", [3, -1, 100, "1", 1.5, None])
    def test_invalid_index_changes_nothing(self, attached, recorder, index):
        attached.play()
        action = attached.bound_action
        recorder.clear()

        with pytest.raises(IndexOutOfRangeError, match="between 0 and 2"):
            attached.select_track(index)

        assert attached.current_track_index == 0
        assert attached.bound_action is action
        assert attached.is_playing
        assert recorder.events == []

    def test_requires_subject(self, controller):
        with pytest.raises(NotAttachedError, match="No mesh attached"):
            controller.select_track(0)

    def test_select_after_deferred_attach(self, make_controller, three_clip_subject):
        controller = make_controller(auto_select_first_track=False)
        controller.attach(three_clip_subject)

        controller.select_track(1)

        assert controller.current_track.name == "Run"
        assert controller.bound_action is not None


class TestSelectTrackByName:
    """Test select_track_by_name."""

    @pytest.fixture
    def attached(self, controller, three_clip_subject):
        controller.attach(three_clip_subject, AttachOptions(play=True))
        return controller

    def test_select_by_name(self, attached):
        info = attached.select_track_by_name("Jump")

        assert info.index == 2
        assert attached.current_track.name == "Jump"
        assert attached.is_playing

    def test_unknown_name(self, attached):
        with pytest.raises(TrackNotFoundError, match='Animation "Swim" not found'):
            attached.select_track_by_name("Swim")

        assert attached.current_track.name == "Walk"

    def test_requires_subject(self, controller):
        with pytest.raises(NotAttachedError):
            controller.select_track_by_name("Walk")
