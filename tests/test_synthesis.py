import numpy as np
import pytest

from wavechord.music.synthesis import MAX_VOICES, PreviewBackend
from wavechord.music.types import WaveformKind
from wavechord.music.wavetable import generate
from wavechord.session import ChordSession


@pytest.fixture
def backend():
    return PreviewBackend(sample_rate=8000)


class TestVoices:
    def test_starts_silent(self, backend):
        assert backend.active_frequencies == []
        assert not np.any(backend.render_samples(256))

    def test_voice_limit(self, backend):
        backend.set_active_frequencies([100.0 + i for i in range(MAX_VOICES + 4)])
        assert len(backend.active_frequencies) == MAX_VOICES

    def test_frequency_floor(self, backend):
        backend.set_active_frequencies([0.25])
        assert backend.active_frequencies == [1.0]
        assert all(type(freq) is float for freq in backend.active_frequencies)

    def test_shrinking_chord_releases_upper_voices(self, backend):
        backend.set_active_frequencies([220.0, 330.0, 440.0])
        backend.set_active_frequencies([220.0])
        assert backend.active_frequencies == [220.0]

    def test_silence_all(self, backend):
        backend.set_active_frequencies([220.0, 330.0])
        backend.silence_all()
        assert backend.active_frequencies == []


class TestTableAndGain:
    def test_wavetable_is_clipped(self, backend):
        backend.load_wavetable([2.0, -3.0, 0.5])
        assert list(backend.table) == [1.0, -1.0, 0.5]

    def test_gain_is_clamped(self, backend):
        backend.set_output_gain(3.0)
        assert backend.gain == 1.0
        backend.set_output_gain(-1.0)
        assert backend.gain == 0.0

    def test_empty_table_renders_silence(self, backend):
        backend.load_wavetable([])
        backend.set_active_frequencies([440.0])
        assert not np.any(backend.render_samples(64))


class TestRender:
    def test_sounding_chord_stays_inside_unit_range(self, backend):
        backend.set_output_gain(1.0)
        backend.load_wavetable(generate(WaveformKind.SQUARE, 512))
        backend.set_active_frequencies([220.0, 277.18, 329.63])
        samples = backend.render_samples(8000)
        assert np.max(np.abs(samples)) > 0.1
        assert np.max(np.abs(samples)) < 1.0

    def test_release_fades_to_silence(self, backend):
        backend.set_active_frequencies([440.0])
        backend.render_samples(4000)
        backend.silence_all()
        backend.render_samples(20000)
        assert not np.any(backend.render_samples(100))

    def test_zero_gain_is_silent(self, backend):
        backend.set_output_gain(0.0)
        backend.set_active_frequencies([440.0])
        assert not np.any(backend.render_samples(500))

    def test_render_segment_format(self, backend):
        backend.set_active_frequencies([440.0])
        segment = backend.render(500)
        assert segment.frame_rate == 8000
        assert segment.channels == 1
        assert segment.sample_width == 2
        assert len(segment) == 500
        assert segment.max > 0

    def test_drives_a_session(self, backend):
        session = ChordSession(backend)
        session.play()
        assert backend.active_frequencies == pytest.approx(session.frequencies)
        session.stop()
        assert backend.active_frequencies == []
