"""Tests for starter-kit normalization."""

import pytest

from firstfix.config import EMPTY_BODY_FALLBACK
from firstfix.errors import BackendReportedError
from firstfix.models import HintSet, IssueTarget
from firstfix.starter_kit import QUALITY_FALLBACK, QUALITY_FULL, assemble

ROUTE = IssueTarget(owner="route-owner", repo="route-repo", number=5)


def _payload(**overrides):
    payload = {
        "owner": "octocat",
        "repo": "hello",
        "sha": "0123456789abcdef",
        "issue": {
            "id": "I_7",
            "number": 7,
            "title": "Handle empty config",
            "url": "https://github.com/octocat/hello/issues/7",
            "bodyText": "Loading an empty config crashes.\n\nTraceback follows.",
        },
        "run_hints": ["pip install -e .", "pytest"],
        "hints": {
            "high_level_goal": "Make empty configs load",
            "where_to_work": ["Loader lives in (hello/config.py: 10-40)"],
            "what_to_change": ["Guard the parse (hello/config.py:22–25) call", "Add a default"],
            "how_to_verify": ["Run (tests/test_config.py: 1-9) suite"],
            "gotchas": ["Keep backwards compatibility"],
        },
        "hints_fallback": False,
    }
    payload.update(overrides)
    return payload


class TestAssemble:
    def test_payload_values_win(self):
        kit = assemble(_payload(), ROUTE)
        assert (kit.owner, kit.repo, kit.sha) == ("octocat", "hello", "0123456789abcdef")
        assert kit.issue.number == 7
        assert kit.run_hints == ("pip install -e .", "pytest")
        assert kit.short_sha == "0123456"

    def test_route_fallback_for_owner_repo_sha(self):
        raw = _payload()
        del raw["owner"], raw["repo"], raw["sha"]
        kit = assemble(raw, ROUTE)
        assert (kit.owner, kit.repo, kit.sha) == ("route-owner", "route-repo", None)

    def test_issue_number_falls_back_to_route(self):
        kit = assemble({"issue": {"title": "x"}}, ROUTE)
        assert kit.issue.number == 5

    def test_total_defaulting_when_hints_absent(self):
        kit = assemble({"owner": "o", "repo": "r"}, ROUTE)
        assert kit.hints == HintSet()
        for name in ("where_to_work", "what_to_change", "how_to_verify", "gotchas"):
            assert getattr(kit.hints, name) == ()
        assert kit.hints.high_level_goal == ""
        assert kit.run_hints == ()
        assert kit.hints_fallback is False
        assert kit.summary == EMPTY_BODY_FALLBACK
        assert kit.where_to_work_html == ()

    def test_partial_hints_filled_in(self):
        kit = assemble({"hints": {"gotchas": ["one"]}}, ROUTE)
        assert kit.hints.gotchas == ("one",)
        assert kit.hints.where_to_work == ()
        assert kit.hints.high_level_goal == ""

    @pytest.mark.parametrize("flag,expected", [(True, True), (1, True), ("yes", True), (None, False), (0, False)])
    def test_hints_fallback_coercion(self, flag, expected):
        kit = assemble(_payload(hints_fallback=flag), ROUTE)
        assert kit.hints_fallback is expected
        assert kit.quality == (QUALITY_FALLBACK if expected else QUALITY_FULL)

    def test_backend_error_raises(self):
        with pytest.raises(BackendReportedError) as exc:
            assemble({"error": "Issue not found"}, ROUTE)
        assert str(exc.value) == "Issue not found"

    def test_non_mapping_payload_is_empty(self):
        kit = assemble(["unexpected"], ROUTE)
        assert (kit.owner, kit.repo, kit.issue.number) == ("route-owner", "route-repo", 5)


class TestDerivedViews:
    def test_where_and_what_are_linkified(self):
        kit = assemble(_payload(), ROUTE)
        (where,) = kit.where_to_work_html
        assert 'href="https://github.com/octocat/hello/blob/0123456789abcdef/hello/config.py#L10-L40"' in where
        what = kit.what_to_change_html
        assert "#L22-L25" in what[0]
        assert what[1] == "Add a default"

    def test_verify_and_gotchas_stay_plain(self):
        kit = assemble(_payload(), ROUTE)
        assert kit.hints.how_to_verify == ("Run (tests/test_config.py: 1-9) suite",)
        assert "<a" not in kit.to_dict()["hints"]["how_to_verify"][0]

    def test_links_without_sha_target_main(self):
        kit = assemble(_payload(sha=None), ROUTE)
        (where,) = kit.where_to_work_html
        assert "/blob/main/hello/config.py\"" in where

    def test_summary_and_roadmap(self):
        kit = assemble(_payload(), ROUTE)
        assert kit.summary == "Loading an empty config crashes."
        assert len(kit.roadmap) == 8
        assert kit.roadmap[2].code_block == "cd hello\ngit checkout -b fix/issue-7"

    def test_segments(self):
        kit = assemble(_payload(), ROUTE)
        (segments,) = kit.where_to_work_segments
        assert segments[0] == "Loader lives in "
        assert segments[1].label == "hello/config.py:10-40"

    def test_to_dict(self):
        data = assemble(_payload(hints_fallback=True), ROUTE).to_dict()
        assert data["quality"] == "fallback"
        assert data["issue"]["number"] == 7
        assert len(data["roadmap"]) == 8
        assert data["hints"]["gotchas"] == ["Keep backwards compatibility"]
