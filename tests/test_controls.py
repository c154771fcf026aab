"""Tests for key bindings and scripted sessions."""

import numpy as np
import pytest

from chamber_fdtd import ChamberConfig, ChamberSession, KeyEvent, parse_events
from chamber_fdtd.controls import KEY_BINDINGS


@pytest.fixture
def session():
    return ChamberSession(ChamberConfig(num_cells=16))


class TestParseEvents:
    def test_parses_entries(self):
        events = parse_events("a@0, up@5,SPACE@7")
        assert events == [
            KeyEvent(step=0, key="a"),
            KeyEvent(step=5, key="up"),
            KeyEvent(step=7, key="space"),
        ]

    def test_empty_spec(self):
        assert parse_events("") == []
        assert parse_events(" , ,") == []

    @pytest.mark.parametrize(
        "spec, match",
        [
            ("a", "Malformed"),
            ("@3", "Malformed"),
            ("q@1", "Unknown key"),
            ("a@soon", "Invalid step"),
            ("a@-1", "non-negative"),
        ],
    )
    def test_rejects_bad_entries(self, spec, match):
        with pytest.raises(ValueError, match=match):
            parse_events(spec)


class TestHandleKey:
    def test_bindings(self):
        assert set(KEY_BINDINGS) == {"r", "a", "space", "up", "down"}

    def test_inject(self, session):
        assert session.handle_key("a")
        np.testing.assert_allclose(session.chamber.cur[0], 0.1)

    def test_keys_are_case_insensitive(self, session):
        assert session.handle_key("A")
        assert session.chamber.cur[0] == pytest.approx(0.1)

    def test_custom_injection_amount(self):
        session = ChamberSession(ChamberConfig(num_cells=8, injection_amount=0.7))
        session.handle_key("a")
        assert session.chamber.cur[0] == pytest.approx(0.7)

    def test_reset(self, session):
        session.handle_key("a")
        session.update()
        session.handle_key("r")
        np.testing.assert_array_equal(session.chamber.cur, np.zeros(16))
        assert session.chamber.step_count == 0

    def test_audio_keys(self, session):
        osc = session.oscillator
        assert session.handle_key("space")
        assert osc.playing
        session.handle_key("up")
        assert osc.hz == 450.0
        session.handle_key("down")
        session.handle_key("down")
        assert osc.hz == 430.0

    def test_unbound_key_ignored(self, session):
        assert session.handle_key("x") is False
        np.testing.assert_array_equal(session.chamber.cur, np.zeros(16))

    def test_chamber_and_tone_are_independent(self, session):
        """Chamber activity never changes the tone and vice versa."""
        session.handle_key("a")
        for _ in range(20):
            session.update()
        assert session.oscillator.hz == 440.0
        assert session.oscillator.phase == 0.0

        before = session.chamber.snapshot()
        session.handle_key("space")
        session.handle_key("up")
        session.oscillator.render(256)
        after = session.chamber.snapshot()
        np.testing.assert_array_equal(before.cur, after.cur)
        assert before.step_count == after.step_count


class TestPlayScript:
    def test_event_applied_before_step(self, session):
        applied = session.play_script([KeyEvent(step=0, key="a")], num_steps=1)
        assert applied == 1
        np.testing.assert_allclose(session.chamber.cur[:3], [0.0, 0.05, 0.0])

    def test_events_beyond_run_do_not_fire(self, session):
        events = parse_events("a@0,a@3,a@10")
        assert session.play_script(events, num_steps=5) == 2
        assert session.chamber.step_count == 5

    def test_reset_mid_script(self, session):
        events = parse_events("a@0,r@8")
        session.play_script(events, num_steps=10)
        assert session.chamber.step_count == 2
        np.testing.assert_array_equal(session.chamber.cur, np.zeros(16))

    def test_matches_manual_replay(self):
        scripted = ChamberSession(ChamberConfig(num_cells=24))
        manual = ChamberSession(ChamberConfig(num_cells=24))

        scripted.play_script(parse_events("a@0,a@4,a@4"), num_steps=12)
        for frame in range(12):
            if frame == 0:
                manual.handle_key("a")
            if frame == 4:
                manual.handle_key("a")
                manual.handle_key("a")
            manual.update()

        np.testing.assert_array_equal(scripted.chamber.cur, manual.chamber.cur)

    def test_callback_receives_frames(self, session):
        frames = []
        session.play_script([], num_steps=4, callback=frames.append)
        assert frames == [0, 1, 2, 3]
