"""Pytest fixtures for game_audio plugin tests."""

import pytest

from ..config_loader import GameAudioConfig, RootConfig

EVENT = "UI_Activity_Event410Lottery_Draw"


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep config discovery away from the developer's real files.

    The loader looks in the working directory, the home directory and
    several environment variables.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("GAME_AUDIO_CONFIG_PATH", raising=False)
    monkeypatch.delenv("JAATO_WORKSPACE_ROOT", raising=False)
    monkeypatch.delenv("workspaceRoot", raising=False)
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    yield


@pytest.fixture
def audio_tree(tmp_path):
    """Create requirements, wwise and unity roots that all mention EVENT."""
    base = tmp_path / "project"

    requirements = base / "requirements"
    requirements.mkdir(parents=True)
    (requirements / "lottery.md").write_text(
        "# Lottery\n\nOn draw, play UI_Activity_Event410Lottery_Draw.\n",
        encoding="utf-8",
    )

    wwise = base / "wwise"
    (wwise / "Events").mkdir(parents=True)
    (wwise / "Events" / "Default Work Unit.wwu").write_text(
        '<?xml version="1.0" encoding="utf-8"?>\n'
        "<WwiseDocument>\n"
        f'  <Event Name="{EVENT}" ID="{{5B3C}}"/>\n'
        "</WwiseDocument>\n",
        encoding="utf-8",
    )

    unity = base / "unity"
    (unity / "Assets" / "Scripts").mkdir(parents=True)
    (unity / "Assets" / "Scripts" / "Lottery.cs").write_text(
        "public class Lottery {\n"
        "    void Draw() {\n"
        f'        AkSoundEngine.PostEvent("{EVENT}", gameObject);\n'
        "    }\n"
        "}\n",
        encoding="utf-8",
    )

    return base


@pytest.fixture
def make_config(audio_tree):
    """Build a GameAudioConfig over the audio_tree roots."""

    def _make(**overrides):
        values = dict(
            roots=[
                RootConfig(id="requirements", path=str(audio_tree / "requirements")),
                RootConfig(id="wwise", path=str(audio_tree / "wwise")),
                RootConfig(id="unity", path=str(audio_tree / "unity")),
            ],
            workspace_dir=str(audio_tree),
        )
        values.update(overrides)
        return GameAudioConfig(**values)

    return _make
