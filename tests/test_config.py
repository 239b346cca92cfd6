"""Tests for vtline.config"""
import pytest

from vtline.config import ENV_HEIGHT, ENV_HISTORY_LIMIT, ENV_WIDTH, ENV_WRITE_LOG, TerminalOptions
from vtline.line import MAX_LINE_LENGTH


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (ENV_WIDTH, ENV_HEIGHT, ENV_HISTORY_LIMIT, ENV_WRITE_LOG):
        monkeypatch.delenv(name, raising=False)


class TestTerminalOptions:
    def test_defaults(self):
        opts = TerminalOptions()
        assert (opts.width, opts.height) == (80, 24)
        assert opts.echo is True
        assert opts.prompt == ""
        assert opts.history_limit is None
        assert opts.max_line_length == MAX_LINE_LENGTH
        assert opts.keybindings == {}

    @pytest.mark.parametrize(
        "kwargs",
        [{"width": 0}, {"height": -2}, {"max_line_length": 0}, {"history_limit": 0}],
    )
    def test_rejects_invalid(self, kwargs):
        with pytest.raises(ValueError):
            TerminalOptions(**kwargs)


class TestFromEnv:
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv(ENV_WIDTH, "120")
        monkeypatch.setenv(ENV_HEIGHT, "40")
        monkeypatch.setenv(ENV_HISTORY_LIMIT, "50")
        monkeypatch.setenv(ENV_WRITE_LOG, "/tmp/vtline.log")
        opts = TerminalOptions.from_env()
        assert (opts.width, opts.height) == (120, 40)
        assert opts.history_limit == 50
        assert opts.write_log == "/tmp/vtline.log"

    def test_blank_values_use_defaults(self, monkeypatch):
        monkeypatch.setenv(ENV_WIDTH, "  ")
        opts = TerminalOptions.from_env()
        assert opts.width == 80
        assert opts.history_limit is None

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv(ENV_WIDTH, "120")
        assert TerminalOptions.from_env(width=60, prompt="$ ").width == 60

    def test_non_integer_is_an_error(self, monkeypatch):
        monkeypatch.setenv(ENV_HEIGHT, "tall")
        with pytest.raises(ValueError, match=ENV_HEIGHT):
            TerminalOptions.from_env()
