"""Tests for the command line entry point."""

import json

import pytest

from ..__main__ import build_parser, build_tool_call, main

EVENT = "Play_Footstep_Grass"


@pytest.fixture
def roots(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("GAME_AUDIO_CONFIG_PATH", raising=False)
    monkeypatch.delenv("JAATO_WORKSPACE_ROOT", raising=False)
    monkeypatch.delenv("workspaceRoot", raising=False)
    wwise = tmp_path / "wwise"
    wwise.mkdir()
    (wwise / "Footsteps.wwu").write_text(f'<Event Name="{EVENT}"/>\n', encoding="utf-8")
    unity = tmp_path / "unity"
    unity.mkdir()
    (unity / "Player.cs").write_text(f'AkSoundEngine.PostEvent("{EVENT}", gameObject);\n', encoding="utf-8")
    return ["--add-root", f"wwise={wwise}", "--add-root", f"unity={unity}"]


def _run_json(capsys, argv):
    code = main(argv)
    return code, json.loads(capsys.readouterr().out)


class TestBuildToolCall:

    def test_search_arguments(self):
        args = build_parser().parse_args(
            ["search", "UI_.*", "--regex", "--root", "wwise", "--root", "unity", "--max-hits", "5"]
        )
        assert build_tool_call(args) == ("audio_search", {
            "query": "UI_.*",
            "regex": True,
            "caseSensitive": False,
            "rootIds": ["wwise", "unity"],
            "maxHits": 5,
        })

    def test_read_arguments(self):
        args = build_parser().parse_args(["read", "wwise", "Events/a.wwu", "--max-bytes", "10"])
        assert build_tool_call(args) == ("audio_read", {
            "rootId": "wwise",
            "relPath": "Events/a.wwu",
            "maxBytes": 10,
        })

    def test_check_event_arguments(self):
        args = build_parser().parse_args(["check-event", EVENT])
        assert build_tool_call(args) == ("audio_check_event", {"eventName": EVENT})

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestMain:

    def test_roots(self, roots, capsys):
        code, result = _run_json(capsys, roots + ["--json", "roots"])

        assert code == 0
        assert [root["id"] for root in result["roots"]] == ["wwise", "unity"]
        assert all(root["exists"] for root in result["roots"])

    def test_search(self, roots, capsys):
        code, result = _run_json(capsys, roots + ["--json", "search", EVENT, "--root", "unity"])

        assert code == 0
        assert [(hit["rootId"], hit["file"], hit["line"]) for hit in result["hits"]] == [
            ("unity", "Player.cs", 1),
        ]

    def test_read(self, roots, capsys):
        code, result = _run_json(capsys, roots + ["--json", "read", "wwise", "Footsteps.wwu"])

        assert code == 0
        assert EVENT in result["text"]

    def test_check_event(self, roots, capsys):
        code, result = _run_json(capsys, roots + ["--json", "check-event", EVENT])

        assert code == 0
        assert result["interpretation"]["wwiseProbablyDefined"] is True
        assert result["interpretation"]["unityReferenced"] is True
        assert result["interpretation"]["requirementsMentioned"] is False

    def test_tool_error_exit_code(self, roots, capsys):
        code, result = _run_json(capsys, roots + ["--json", "read", "wwise", "../etc/passwd"])

        assert code == 1
        assert result["error_type"] == "validation"

    def test_rich_output(self, roots, capsys):
        assert main(roots + ["roots"]) == 0
        assert '"roots"' in capsys.readouterr().out

    def test_config_file(self, roots, tmp_path, capsys):
        config = tmp_path / "game_audio.json"
        config.write_text(json.dumps({"roots": [{"id": "wwise", "path": "wwise"}], "maxHits": 3}))

        code, result = _run_json(capsys, ["--config", str(config), "--json", "roots"])

        assert code == 0
        assert result["roots"][0]["path"] == str(tmp_path / "wwise")
        assert result["limits"]["maxHits"] == 3

    def test_missing_roots(self, roots, capsys):
        assert main(["roots"]) == 2
        assert "roots is required" in capsys.readouterr().err

    def test_missing_config_file(self, roots, tmp_path, capsys):
        assert main(["--config", str(tmp_path / "nope.json"), "roots"]) == 2

    def test_malformed_config_file(self, roots, tmp_path, capsys):
        config = tmp_path / "game_audio.json"
        config.write_text("{not json", encoding="utf-8")

        assert main(["--config", str(config), "roots"]) == 2
        assert "Error:" in capsys.readouterr().err

    def test_bad_root_spec(self, roots):
        with pytest.raises(SystemExit):
            main(["--add-root", "wwise", "roots"])
