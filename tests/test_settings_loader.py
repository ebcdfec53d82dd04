from pathlib import Path

import pytest

from bgpexporter.config.loader import load_settings
from bgpexporter.config.settings import ExporterSettings
from bgpexporter.core.errors import ConfigError


def test_defaults() -> None:
    settings = load_settings()
    assert settings == ExporterSettings()
    assert settings.port == 9114
    assert settings.poll_interval == 10.0
    assert settings.command == "show ip bgp neighbors"


def test_yaml_with_overrides(tmp_path: Path) -> None:
    cfg = tmp_path / "exporter.yml"
    cfg.write_text("port: 9200\npoll_interval: 30\ncontainer: clab-lab-r1\n", encoding="utf-8")
    settings = load_settings(cfg, port=9300, poll_interval=None)
    assert settings.port == 9300
    assert settings.poll_interval == 30.0
    assert settings.container == "clab-lab-r1"


@pytest.mark.parametrize(
    "body",
    [
        "poll_interval: 0\n",
        "command_timeout: -1\n",
        "port: 70000\n",
        "port: http\n",
        "bogus_key: 1\n",
        "- just\n- a list\n",
    ],
)
def test_invalid_settings(tmp_path: Path, body: str) -> None:
    cfg = tmp_path / "exporter.yml"
    cfg.write_text(body, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(cfg)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_settings(tmp_path / "absent.yml")
