"""Tests for settings loading and CLI wiring."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

import swarm_exporter.main as cli
from swarm_exporter.config import Settings, get_settings


def test_defaults_match_original_exporter(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    settings = get_settings()

    assert settings.listen_port == 9675
    assert settings.metrics_path == "/metrics"
    assert settings.docker_host is None
    assert settings.include_runtime_metrics is False


def test_environment_overrides(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SWARM_EXPORTER_LISTEN_PORT", "9100")
    monkeypatch.setenv("SWARM_EXPORTER_DOCKER_HOST", "tcp://manager:2376")
    monkeypatch.setenv("SWARM_EXPORTER_INCLUDE_RUNTIME_METRICS", "true")

    settings = get_settings()

    assert settings.listen_port == 9100
    assert settings.docker_host == "tcp://manager:2376"
    assert settings.include_runtime_metrics is True


def test_invalid_port_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(listen_port=70000)


def test_cli_flags_override_settings(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    served: dict[str, Settings] = {}

    def fake_serve(settings, registry) -> None:
        served["settings"] = settings

    monkeypatch.setattr(cli, "serve", fake_serve)

    code = cli.main(["--host", "127.0.0.1", "--port", "9200", "--docker-host", "unix:///tmp/docker.sock"])

    assert code == 0
    assert served["settings"].listen_host == "127.0.0.1"
    assert served["settings"].listen_port == 9200
    assert served["settings"].docker_host == "unix:///tmp/docker.sock"


def test_cli_reports_startup_failure(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)

    def broken_serve(settings, registry) -> None:
        raise OSError("address already in use")

    monkeypatch.setattr(cli, "serve", broken_serve)

    assert cli.main([]) == 2
    assert "address already in use" in capsys.readouterr().err


@pytest.mark.parametrize("port", ["70000", "0"])
def test_cli_rejects_out_of_range_port(port: str, tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)
    served: list[Settings] = []
    monkeypatch.setattr(cli, "serve", lambda settings, registry: served.append(settings))

    assert cli.main(["--port", port]) == 2
    assert served == []
    assert "listen_port" in capsys.readouterr().err


def test_cli_flags_win_over_environment(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SWARM_EXPORTER_LISTEN_PORT", "9100")
    monkeypatch.setenv("SWARM_EXPORTER_LISTEN_HOST", "10.0.0.1")
    served: list[Settings] = []
    monkeypatch.setattr(cli, "serve", lambda settings, registry: served.append(settings))

    assert cli.main(["--port", "9300"]) == 0
    assert served[0].listen_port == 9300
    assert served[0].listen_host == "10.0.0.1"
