"""Tests for the sine oscillator."""

import numpy as np
import pytest
from scipy.io import wavfile

from chamber_fdtd import SineOscillator
from chamber_fdtd.audio import FREQUENCY_STEP


@pytest.fixture
def quarter_rate_osc():
    """1 Hz tone rendered at 4 samples/s: one quarter cycle per frame."""
    return SineOscillator(hz=1.0, volume=0.5, playing=True)


class TestState:
    def test_defaults(self):
        osc = SineOscillator()
        assert osc.hz == 440.0
        assert osc.volume == 0.5
        assert osc.phase == 0.0
        assert not osc.playing

    def test_toggle(self):
        osc = SineOscillator()
        assert osc.toggle() is True
        assert osc.playing
        assert osc.toggle() is False
        assert not osc.playing

    def test_nudge(self):
        osc = SineOscillator()
        assert osc.nudge(FREQUENCY_STEP) == 450.0
        assert osc.nudge(-2 * FREQUENCY_STEP) == 430.0

    def test_nudge_stops_at_zero(self):
        osc = SineOscillator(hz=5.0)
        assert osc.nudge(-FREQUENCY_STEP) == 0.0
        assert osc.hz == 0.0

    def test_negative_frequency_rejected(self):
        with pytest.raises(ValueError):
            SineOscillator(hz=-1.0)
        osc = SineOscillator()
        with pytest.raises(ValueError):
            osc.hz = -10.0

    def test_repr(self):
        assert "paused" in repr(SineOscillator())
        assert "playing" in repr(SineOscillator(playing=True))


class TestRender:
    def test_paused_is_silent(self):
        osc = SineOscillator()
        frames = osc.render(64, channels=2)
        assert frames.shape == (64, 2)
        assert frames.dtype == np.float32
        np.testing.assert_array_equal(frames, 0.0)
        assert osc.phase == 0.0

    def test_quarter_cycle_samples(self, quarter_rate_osc):
        frames = quarter_rate_osc.render(4, sample_rate=4)
        np.testing.assert_allclose(frames[:, 0], [0.0, 0.5, 0.0, -0.5], atol=1e-6)
        assert quarter_rate_osc.phase == pytest.approx(0.0)

    def test_channels_carry_same_sample(self, quarter_rate_osc):
        frames = quarter_rate_osc.render(8, sample_rate=4, channels=2)
        assert frames.shape == (8, 2)
        np.testing.assert_array_equal(frames[:, 0], frames[:, 1])

    def test_phase_continuity_across_blocks(self):
        split = SineOscillator(hz=440.0, playing=True)
        whole = SineOscillator(hz=440.0, playing=True)

        blocks = np.concatenate([split.render(300), split.render(212)])
        np.testing.assert_allclose(blocks, whole.render(512), atol=1e-5)

    def test_phase_stays_in_unit_interval(self):
        osc = SineOscillator(hz=1234.5, playing=True)
        for _ in range(20):
            osc.render(1000)
            assert 0.0 <= osc.phase < 1.0

    def test_amplitude_bounded_by_volume(self):
        osc = SineOscillator(hz=440.0, volume=0.5, playing=True)
        frames = osc.render(44100)
        assert np.max(np.abs(frames)) <= 0.5 + 1e-6

    def test_reset_phase(self, quarter_rate_osc):
        quarter_rate_osc.render(1, sample_rate=4)
        assert quarter_rate_osc.phase == pytest.approx(0.25)
        quarter_rate_osc.reset_phase()
        assert quarter_rate_osc.phase == 0.0

    @pytest.mark.parametrize("kwargs", [{"sample_rate": 0}, {"channels": 0}])
    def test_invalid_arguments(self, kwargs):
        with pytest.raises(ValueError):
            SineOscillator(playing=True).render(10, **kwargs)


class TestWav:
    def test_writes_int16_tone(self, tmp_path):
        osc = SineOscillator(hz=440.0)
        path = tmp_path / "tone.wav"
        osc.to_wav(path, duration=0.5, sample_rate=8000)

        rate, data = wavfile.read(path)
        assert rate == 8000
        assert data.dtype == np.int16
        assert len(data) == 4000
        assert 0.45 * 32767 < np.max(np.abs(data)) <= 0.5 * 32767 + 1

    def test_leaves_state_unchanged(self, tmp_path):
        osc = SineOscillator(hz=440.0)
        osc.to_wav(tmp_path / "tone.wav", duration=0.1)
        assert not osc.playing
        assert osc.phase == 0.0

    def test_negative_duration(self, tmp_path):
        with pytest.raises(ValueError):
            SineOscillator().to_wav(tmp_path / "tone.wav", duration=-1.0)
