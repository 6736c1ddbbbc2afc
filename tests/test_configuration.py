import pytest

from runt.core.configuration import CONFIG_ENV, RuntConfig, load_config
from runt.core.errors import ConfigurationError


def test_defaults(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    cfg = load_config()
    assert cfg.max_parallel == 4
    assert cfg.source == "Runt Demo"
    assert cfg.tags == []
    assert cfg.chunk_size == 4096
    assert cfg.log_level == "WARNING"
    assert cfg.log_file is None


def test_load_yaml(tmp_path):
    p = tmp_path / "runt.yaml"
    p.write_text("max_parallel: 8\nsource: nightly\ntags: [ci, linux]\nlog_level: debug\n")
    cfg = load_config(p)
    assert cfg.max_parallel == 8
    assert cfg.source == "nightly"
    assert cfg.tags == ["ci", "linux"]
    assert cfg.log_level == "DEBUG"


def test_env_variable_is_used(tmp_path, monkeypatch):
    p = tmp_path / "env.yaml"
    p.write_text("max_parallel: 2\n")
    monkeypatch.setenv(CONFIG_ENV, str(p))
    assert load_config().max_parallel == 2


def test_empty_file_gives_defaults(tmp_path):
    p = tmp_path / "empty.yaml"
    p.write_text("")
    assert load_config(p) == RuntConfig()


@pytest.mark.parametrize("text", [
    "max_parallel: 0\n",
    "max_parallel: many\n",
    "chunk_size: -1\n",
    "tags: nightly\n",
    "source: ''\n",
    "log_level: LOUD\n",
    "unknown_key: 1\n",
    "- just\n- a list\n",
    "max_parallel: [\n",
    "log_file: 5\n",
    "log_file: [a]\n",
])
def test_invalid_configuration(tmp_path, text):
    p = tmp_path / "bad.yaml"
    p.write_text(text)
    with pytest.raises(ConfigurationError):
        load_config(p)


def test_missing_explicit_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_config(tmp_path / "absent.yaml")


def test_override_ignores_none_and_validates():
    cfg = RuntConfig().override(max_parallel=None, source="x")
    assert cfg.max_parallel == 4 and cfg.source == "x"
    with pytest.raises(ConfigurationError):
        RuntConfig().override(max_parallel=0)
