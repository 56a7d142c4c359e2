"""Tests for the viser playback panel against a fake GUI server."""

import threading

import pytest
import viser

from src.clipdeck.config.settings import AttachOptions
from src.clipdeck.ui.layout import NO_TRACKS_OPTION, ViserPlaybackPanel


@pytest.fixture
def now():
    """Mutable time source for drag release."""
    return [0.0]


@pytest.fixture
def panel(fake_server, controller, now):
    return ViserPlaybackPanel(fake_server, controller, timer=lambda: now[0])


@pytest.fixture
def handles(fake_server, panel):
    return fake_server.gui.handles


class TestPanelCreation:
    """Test widget creation."""

    def test_widgets_created(self, handles):
        assert handles["Time"].value == "--:--:-- / --:--:--"
        assert handles["Progress"].value == 0.0
        assert handles["Progress"].max == 100.0
        assert handles["Play"].icon == viser.Icon.PLAYER_PLAY
        assert handles["Animation"].options == (NO_TRACKS_OPTION,)
        assert handles["Animation"].disabled is True
        assert handles["markdown"].content == "No animations"

    def test_requires_view(self, fake_server, make_controller):
        controller = make_controller(init_ui_controls=False)
        with pytest.raises(ValueError, match="init_ui_controls"):
            ViserPlaybackPanel(fake_server, controller)

    def test_no_selector_widgets_when_disabled(self, fake_server, make_controller):
        controller = make_controller(enable_track_selector=False)
        panel = ViserPlaybackPanel(fake_server, controller)

        assert panel.track_dropdown is None
        assert "Animation" not in fake_server.gui.handles


class TestPanelSync:
    """Test mirroring controller state onto widgets."""

    def test_attach_fills_dropdown(self, controller, handles, three_clip_subject):
        controller.attach(three_clip_subject)

        dropdown = handles["Animation"]
        assert dropdown.options == ("0: Walk", "1: Run", "2: Jump")
        assert dropdown.value == "0: Walk"
        assert dropdown.disabled is False
        assert handles["markdown"].content == "1 track, 00:02:00"
        assert handles["Time"].value == "00:00:00 / 00:02:00"
        assert controller.current_track_index == 0

    def test_play_button_label_follows_state(self, controller, handles, ten_second_subject):
        controller.attach(ten_second_subject)

        controller.play()
        assert handles["Play"].label == "Pause"
        assert handles["Play"].icon == viser.Icon.PLAYER_PAUSE

        controller.pause()
        assert handles["Play"].label == "Play"

    def test_advance_moves_slider(self, controller, panel, handles, ten_second_subject):
        controller.attach(ten_second_subject, AttachOptions(play=True))

        panel.advance(2.5)

        assert handles["Progress"].value == 25.0
        assert handles["Time"].value == "00:02:50 / 00:10:00"
        assert controller.is_playing

    def test_detach_resets_widgets(self, controller, handles, three_clip_subject):
        controller.attach(three_clip_subject)
        controller.detach()

        assert handles["Animation"].options == (NO_TRACKS_OPTION,)
        assert handles["Animation"].disabled is True
        assert handles["Time"].value == "--:--:-- / --:--:--"


class TestPanelInput:
    """Test widget callbacks driving the controller."""

    def test_slider_scrubs(self, controller, recorder, handles, ten_second_subject):
        controller.attach(ten_second_subject, AttachOptions(play=True))
        recorder.clear()

        handles["Progress"].value = 50.0

        assert controller.current_time == 5.0
        assert controller.is_paused
        assert recorder.types == ["PAUSE", "CHANGE_PERCENTAGE", "CHANGE_TIME"]

    def test_drag_pauses_and_resumes_once(
        self, controller, recorder, panel, handles, now, ten_second_subject
    ):
        """Test a multi-update drag emits a single PAUSE and PLAY pair."""
        controller.attach(ten_second_subject, AttachOptions(play=True))
        recorder.clear()

        for value in (10.0, 20.0, 30.0):
            handles["Progress"].value = value
            now[0] += 0.1
            panel.advance(0.0)

        assert controller.is_paused
        assert controller.current_time == pytest.approx(3.0)

        now[0] += panel.release_after
        panel.advance(0.0)

        assert controller.is_playing
        assert recorder.types.count("PAUSE") == 1
        assert recorder.types.count("PLAY") == 1
        assert recorder.types[-1] == "PLAY"

    def test_drag_while_stopped_stays_stopped(
        self, controller, panel, handles, now, ten_second_subject
    ):
        controller.attach(ten_second_subject)

        handles["Progress"].value = 40.0
        now[0] += panel.release_after
        panel.advance(0.0)

        assert controller.is_stopped
        assert controller.current_time == 4.0
        assert not panel.input.dragging

    def test_client_update_during_refresh_is_not_dropped(
        self, controller, recorder, panel, handles, monkeypatch, ten_second_subject
    ):
        """Test a slider event from another thread waits for the refresh to finish."""
        controller.attach(ten_second_subject, AttachOptions(play=True))
        recorder.clear()
        set_widget = panel._set
        client = threading.Thread(target=setattr, args=(handles["Progress"], "value", 50.0))

        def set_during_refresh(control, **kwargs):
            if client.ident is None:
                client.start()
                client.join(timeout=0.2)
            set_widget(control, **kwargs)

        monkeypatch.setattr(panel, "_set", set_during_refresh)
        panel.advance(1.0)
        client.join(timeout=5.0)

        assert not client.is_alive()
        assert controller.is_paused
        assert recorder.types == ["PAUSE", "CHANGE_PERCENTAGE", "CHANGE_TIME"]

    def test_programmatic_updates_do_not_scrub(
        self, controller, recorder, panel, ten_second_subject
    ):
        """Test slider refreshes from playback do not loop back as seeks."""
        controller.attach(ten_second_subject, AttachOptions(play=True))
        recorder.clear()

        panel.advance(1.0)

        assert "CHANGE_PERCENTAGE" not in recorder.types
        assert controller.current_time == 1.0

    def test_play_button_toggles(self, controller, handles, ten_second_subject):
        controller.attach(ten_second_subject)

        handles["Play"].click()
        assert controller.is_playing

        handles["Play"].click()
        assert controller.is_paused

    def test_stop_button(self, controller, handles, ten_second_subject):
        controller.attach(ten_second_subject, AttachOptions(play=True, at_time=4))

        handles["Stop"].click()

        assert controller.is_stopped
        assert handles["Progress"].value == 0.0

    def test_dropdown_selects_track(self, controller, handles, three_clip_subject):
        controller.attach(three_clip_subject)

        handles["Animation"].value = "2: Jump"

        assert controller.current_track.name == "Jump"
        assert handles["markdown"].content == "0 tracks, 00:00:80"

    def test_placeholder_option_ignored(self, controller, handles):
        handles["Animation"].value = NO_TRACKS_OPTION
        assert controller.current_track_index == -1
