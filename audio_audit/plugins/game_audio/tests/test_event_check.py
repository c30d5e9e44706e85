"""Tests for the heuristic event cross-check."""

from unittest import mock

import pytest

from .. import event_check as event_check_module
from ..config_loader import RootConfig
from ..errors import RequestValidationError
from ..event_check import HEURISTIC_NOTES, check_event, wwise_name_attribute
from .conftest import EVENT


def test_wwise_name_attribute():
    assert wwise_name_attribute("Play_Footstep") == 'Name="Play_Footstep"'


class TestCheckEvent:

    def test_event_present_everywhere(self, make_config):
        result = check_event(make_config(), EVENT)

        assert result["eventName"] == EVENT
        assert set(result["checks"]) == {"requirements", "wwiseNameAttr", "unityRefs", "fallback"}
        assert result["interpretation"] == {
            "requirementsMentioned": True,
            "wwiseProbablyDefined": True,
            "unityReferenced": True,
            "notes": HEURISTIC_NOTES,
        }
        assert len(result["checks"]["fallback"]["hits"]) == 3

    def test_branches_are_search_results(self, make_config):
        result = check_event(make_config(), EVENT)

        wwise = result["checks"]["wwiseNameAttr"]
        assert wwise["hits"][0]["rootId"] == "wwise"
        assert wwise["hits"][0]["file"] == "Events/Default Work Unit.wwu"
        assert set(wwise) == {"hits", "scannedFiles", "skippedLargeFiles"}

    def test_requirements_only(self, make_config, audio_tree):
        config = make_config(roots=[
            RootConfig(id="requirements", path=str(audio_tree / "requirements")),
        ])
        result = check_event(config, EVENT)

        interpretation = result["interpretation"]
        assert interpretation["requirementsMentioned"] is True
        assert interpretation["wwiseProbablyDefined"] is False
        assert interpretation["unityReferenced"] is False
        assert [hit["rootId"] for hit in result["checks"]["fallback"]["hits"]] == ["requirements"]

    def test_plain_mention_in_wwise_is_not_a_definition(self, make_config, audio_tree):
        (audio_tree / "wwise" / "Events" / "Default Work Unit.wwu").write_text(
            f"<!-- placeholder for {EVENT} -->\n", encoding="utf-8"
        )
        result = check_event(make_config(), EVENT)

        assert result["interpretation"]["wwiseProbablyDefined"] is False
        assert any(hit["rootId"] == "wwise" for hit in result["checks"]["fallback"]["hits"])

    def test_unconventional_root_ids_only_fallback(self, make_config, audio_tree):
        config = make_config(roots=[
            RootConfig(id="docs", path=str(audio_tree / "requirements")),
            RootConfig(id="game", path=str(audio_tree / "unity")),
        ])
        result = check_event(config, EVENT)

        interpretation = result["interpretation"]
        assert not interpretation["requirementsMentioned"]
        assert not interpretation["wwiseProbablyDefined"]
        assert not interpretation["unityReferenced"]
        assert len(result["checks"]["fallback"]["hits"]) == 2

    def test_event_absent(self, make_config):
        result = check_event(make_config(), "Play_Missing_Event")

        assert not any(
            result["interpretation"][key]
            for key in ("requirementsMentioned", "wwiseProbablyDefined", "unityReferenced")
        )
        assert result["checks"]["fallback"]["hits"] == []

    def test_failing_branch_reported_as_none(self, make_config):
        real_search = event_check_module.search_across_roots

        def flaky_search(config, query, root_ids=None, **kwargs):
            if root_ids == ["unity"]:
                raise OSError("disk went away")
            return real_search(config, query, root_ids=root_ids, **kwargs)

        with mock.patch.object(event_check_module, "search_across_roots", side_effect=flaky_search):
            result = check_event(make_config(), EVENT)

        assert result["checks"]["unityRefs"] is None
        assert result["interpretation"]["unityReferenced"] is False
        assert result["interpretation"]["requirementsMentioned"] is True
        assert result["interpretation"]["wwiseProbablyDefined"] is True

    def test_empty_event_name(self, make_config):
        with pytest.raises(RequestValidationError, match="eventName required"):
            check_event(make_config(), "  ")
