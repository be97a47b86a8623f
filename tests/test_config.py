"""Tests for layered configuration loading."""

from pathlib import Path

import pytest

from gopin_core.config import CONFIG_FILENAME, load_config
from gopin_core.errors import ConfigError, EnvironmentCheckError


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_defaults(tmp_path: Path):
    cfg = load_config(tmp_path, environ={"GOPATH": "/go"})
    assert cfg.manifest_path == tmp_path / "Godeps"
    assert cfg.gopath == (Path("/go"),)
    assert cfg.goroot is None
    assert cfg.fetch_tool == "go"
    assert cfg.fetch_timeout is None and cfg.checkout_timeout is None
    assert cfg.jobs == 1
    assert cfg.gopath_mode is True


def test_gopath_required(tmp_path: Path):
    with pytest.raises(EnvironmentCheckError, match="GOPATH not set"):
        load_config(tmp_path, environ={})


def test_gopath_optional_for_inspection(tmp_path: Path):
    assert load_config(tmp_path, environ={}, require_gopath=False).gopath == ()


def test_config_file_values(tmp_path: Path):
    _write(
        tmp_path / CONFIG_FILENAME,
        """
[manifest]
path = "deps/Godeps"

[fetch]
tool = "go1.4"
timeout = 120
gopath_mode = false

[checkout]
timeout = 30.5

[run]
jobs = 3
""",
    )
    cfg = load_config(tmp_path, environ={"GOPATH": "/go", "GOROOT": "/usr/lib/go"})
    assert cfg.manifest_path == tmp_path / "deps" / "Godeps"
    assert cfg.fetch_tool == "go1.4"
    assert cfg.fetch_timeout == 120
    assert cfg.gopath_mode is False
    assert cfg.checkout_timeout == 30.5
    assert cfg.jobs == 3
    assert cfg.goroot == Path("/usr/lib/go")


def test_precedence_cli_over_env_over_file(tmp_path: Path):
    _write(tmp_path / CONFIG_FILENAME, "[run]\njobs = 2\n[fetch]\ntool = \"from-file\"\n")
    env = {"GOPATH": "/go", "GOPIN_JOBS": "4", "GOPIN_FETCH_TOOL": "from-env"}
    cfg = load_config(tmp_path, environ=env)
    assert (cfg.jobs, cfg.fetch_tool) == (4, "from-env")
    cfg = load_config(tmp_path, environ=env, jobs=8, timeout=9, manifest_path=Path("/abs/Godeps"))
    assert cfg.jobs == 8
    assert cfg.fetch_timeout == cfg.checkout_timeout == 9
    assert cfg.manifest_path == Path("/abs/Godeps")


def test_explicit_config_path_via_env(tmp_path: Path):
    _write(tmp_path / "conf" / "pins.toml", "[run]\njobs = 5\n")
    cfg = load_config(tmp_path, environ={"GOPATH": "/go", "GOPIN_CONFIG": "conf/pins.toml"})
    assert cfg.jobs == 5


def test_missing_explicit_config_is_an_error(tmp_path: Path):
    with pytest.raises(ConfigError, match="config file not found"):
        load_config(tmp_path, config_path=Path("nope.toml"), environ={"GOPATH": "/go"})


def test_validation_collects_all_errors(tmp_path: Path):
    _write(
        tmp_path / CONFIG_FILENAME,
        "[run]\njobs = 0\n[fetch]\ntimeout = -1\n[log]\nverbosity = \"loud\"\n",
    )
    with pytest.raises(ConfigError) as excinfo:
        load_config(tmp_path, environ={"GOPATH": "/go"})
    assert len(excinfo.value.errors) == 3
    assert excinfo.value.source == tmp_path / CONFIG_FILENAME


def test_unknown_keys_rejected(tmp_path: Path):
    _write(tmp_path / CONFIG_FILENAME, "[fetch]\nbinary = \"go\"\n[extra]\nx = 1\n")
    with pytest.raises(ConfigError) as excinfo:
        load_config(tmp_path, environ={"GOPATH": "/go"})
    assert "unknown key [fetch].binary" in excinfo.value.errors
    assert "unknown table [extra]" in excinfo.value.errors


def test_bad_toml(tmp_path: Path):
    _write(tmp_path / CONFIG_FILENAME, "[run\njobs = 1\n")
    with pytest.raises(ConfigError, match="TOML parse error"):
        load_config(tmp_path, environ={"GOPATH": "/go"})


def test_bad_env_int(tmp_path: Path):
    with pytest.raises(ConfigError, match="GOPIN_JOBS"):
        load_config(tmp_path, environ={"GOPATH": "/go", "GOPIN_JOBS": "many"})
