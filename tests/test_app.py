import argparse
import threading

import pytest

from tystnad.app import Config, KeepAlive, build_parser, main, validate_length
from tystnad.player import AudioError
from tystnad.settings import Settings
from tystnad.wav import generate_empty_sound


class FakePlayer:
    def __init__(self, sink, log, fail=False, on_wait=None):
        self.sink = sink
        self.log = log
        self.fail = fail
        self.on_wait = on_wait

    def play(self, data):
        if self.fail:
            raise AudioError("boom")
        self.log.append(("play", self.sink, bytes(data)))

    def play_file(self, file_path):
        if self.fail:
            raise AudioError("boom")
        self.log.append(("play_file", self.sink, file_path))

    def wait_until_done(self):
        if self.on_wait is not None:
            self.on_wait()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.log.append(("stop", self.sink, None))


def make_factory(log, **kwargs):
    return lambda sink: FakePlayer(sink, log, **kwargs)


def test_config_defaults_from_empty_settings(tmp_path):
    config = Config.from_settings(Settings(tmp_path / "s.json"))
    assert config == Config()
    assert config.alsa_sink == "default"
    assert config.length == 500


def test_config_round_trip(tmp_path):
    settings = Settings(tmp_path / "s.json")
    original = Config(enabled=True, length=12, custom_audio_file="/tmp/a.wav",
                      alsa_sink="hw:1", run_on_startup=True)
    original.save(settings)
    assert Config.from_settings(settings) == original


def test_config_save_empty_sink_stores_default(tmp_path):
    settings = Settings(tmp_path / "s.json")
    Config(alsa_sink="").save(settings)
    assert settings.load("alsa_sink") == "default"


@pytest.mark.parametrize("text, expected", [("1", 1), ("3600", 3600), ("42", 42)])
def test_validate_length_accepts_range(text, expected):
    assert validate_length(text) == expected


@pytest.mark.parametrize("text", ["0", "3601", "-5", "abc"])
def test_validate_length_rejects(text):
    with pytest.raises(argparse.ArgumentTypeError):
        validate_length(text)


def test_sound_matches_length_and_keeps_tail():
    keep_alive = KeepAlive(Config(length=1), make_factory([]))
    sound = keep_alive.sound()
    reference = generate_empty_sound(1)
    assert len(sound) == len(reference)
    assert sound[10000:] == reference[10000:]


def test_sound_regenerates_on_length_change():
    config = Config(length=1)
    keep_alive = KeepAlive(config, make_factory([]))
    keep_alive.sound()
    config.length = 2
    assert len(keep_alive.sound()) == len(generate_empty_sound(2))


def test_play_once_plays_silence_on_default_sink():
    log = []
    config = Config(enabled=True, length=1, alsa_sink="")
    keep_alive = KeepAlive(config, make_factory(log))
    assert keep_alive.play_once() is True
    assert log[0] == ("play", "default", bytes(keep_alive.sound()))
    assert log[-1][0] == "stop"


def test_play_once_uses_custom_file():
    log = []
    config = Config(enabled=True, custom_audio_file="/music/x.wav", alsa_sink="hw:2")
    assert KeepAlive(config, make_factory(log)).play_once() is True
    assert log[0] == ("play_file", "hw:2", "/music/x.wav")


def test_play_once_failure_disables():
    config = Config(enabled=True, length=1)
    keep_alive = KeepAlive(config, make_factory([], fail=True))
    assert keep_alive.play_once() is False
    assert config.enabled is False
    assert isinstance(keep_alive.last_error, AudioError)


def test_run_stops_when_event_set():
    log = []
    stop = threading.Event()
    keep_alive = KeepAlive(Config(enabled=True, length=1), make_factory(log, on_wait=stop.set))
    keep_alive.run(stop)
    assert [entry[0] for entry in log] == ["play", "stop"]


def test_run_idle_when_disabled():
    log = []
    stop = threading.Event()
    stop.set()
    KeepAlive(Config(enabled=False), make_factory(log)).run(stop)
    assert log == []


def test_parser_enable_disable_exclusive():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--enable", "--disable"])


def test_main_configure_only_saves(tmp_path):
    path = tmp_path / "s.json"
    assert main(["--settings", str(path), "--length", "5", "--enable", "--configure-only"]) == 0
    settings = Settings(path)
    assert settings.load("audio_length") == 5
    assert settings.load("state") is True


def test_main_disabled_returns_without_playing(tmp_path):
    path = tmp_path / "s.json"
    assert main(["--settings", str(path), "--disable"]) == 0
    assert Settings(path).load("state") is False


def test_main_rejects_bad_length(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["--settings", str(tmp_path / "s.json"), "--length", "0"])
    assert excinfo.value.code == 2