import pytest

from wavechord.config import Settings, load_settings
from wavechord.music.types import WaveformKind

_VARS = [
    "WAVECHORD_TUNING_HZ",
    "WAVECHORD_ROOT",
    "WAVECHORD_WAVEFORM",
    "WAVECHORD_INTERVALS",
    "WAVECHORD_GAIN",
    "WAVECHORD_TABLE_LENGTH",
    "WAVECHORD_SAMPLE_RATE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


class TestLoadSettings:
    def test_defaults(self):
        assert load_settings() == Settings()

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("WAVECHORD_TUNING_HZ", "442.5")
        monkeypatch.setenv("WAVECHORD_ROOT", "Eb")
        monkeypatch.setenv("WAVECHORD_WAVEFORM", "Triangle")
        monkeypatch.setenv("WAVECHORD_INTERVALS", "1, b3  5,b7")
        monkeypatch.setenv("WAVECHORD_GAIN", "0.6")
        monkeypatch.setenv("WAVECHORD_TABLE_LENGTH", "1024")
        monkeypatch.setenv("WAVECHORD_SAMPLE_RATE", "48000")

        settings = load_settings()
        assert settings.tuning_hz == 442.5
        assert settings.root == "Eb"
        assert settings.waveform is WaveformKind.TRIANGLE
        assert settings.intervals == frozenset({"1", "b3", "5", "b7"})
        assert settings.gain == 0.6
        assert settings.table_length == 1024
        assert settings.sample_rate == 48000

    def test_empty_interval_list(self, monkeypatch):
        monkeypatch.setenv("WAVECHORD_INTERVALS", "")
        assert load_settings().intervals == frozenset()

    @pytest.mark.parametrize(
        "name, value",
        [
            ("WAVECHORD_TUNING_HZ", "four-forty"),
            ("WAVECHORD_WAVEFORM", "noise"),
            ("WAVECHORD_TABLE_LENGTH", "0"),
            ("WAVECHORD_SAMPLE_RATE", "44.1k"),
        ],
    )
    def test_bad_values_name_the_variable(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(RuntimeError, match=name):
            load_settings()
