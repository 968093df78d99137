"""Normalization boundary between the starter-kit backend and the renderers.

Everything past :func:`assemble` can rely on every field being present:
strings are ``""`` rather than ``None`` and sequences are tuples.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any

from .errors import BackendReportedError
from .linkify import CodeLink, linkify, split_references
from .models import HintSet, IssueRef, IssueTarget, LinkContext, RoadmapStep, _as_str, _str_tuple
from .roadmap import build_roadmap
from .summary import summarize_issue

logger = logging.getLogger(__name__)

QUALITY_FULL = "full"
QUALITY_FALLBACK = "fallback"


@dataclass(frozen=True)
class StarterKitPayload:
    owner: str
    repo: str
    issue: IssueRef
    sha: str | None = None
    run_hints: tuple[str, ...] = ()
    hints: HintSet = field(default_factory=HintSet)
    hints_fallback: bool = False

    @property
    def link_context(self) -> LinkContext:
        return LinkContext(owner=self.owner, repo=self.repo, sha=self.sha)

    @property
    def short_sha(self) -> str | None:
        return self.sha[:7] if self.sha else None

    @property
    def quality(self) -> str:
        """``"fallback"`` when the hints came from the backend's quick path."""
        return QUALITY_FALLBACK if self.hints_fallback else QUALITY_FULL

    # Derived views are recomputed on every access.

    @property
    def summary(self) -> str:
        return summarize_issue(self.issue)

    @property
    def roadmap(self) -> tuple[RoadmapStep, ...]:
        return build_roadmap(self.owner, self.repo, self.issue.number)

    @property
    def where_to_work_html(self) -> tuple[str, ...]:
        return tuple(linkify(line, self.link_context) for line in self.hints.where_to_work)

    @property
    def what_to_change_html(self) -> tuple[str, ...]:
        return tuple(linkify(line, self.link_context) for line in self.hints.what_to_change)

    @property
    def where_to_work_segments(self) -> tuple[list[str | CodeLink], ...]:
        return tuple(split_references(line, self.link_context) for line in self.hints.where_to_work)

    @property
    def what_to_change_segments(self) -> tuple[list[str | CodeLink], ...]:
        return tuple(split_references(line, self.link_context) for line in self.hints.what_to_change)

    def to_dict(self) -> dict[str, Any]:
        return {
            "owner": self.owner,
            "repo": self.repo,
            "sha": self.sha,
            "issue": self.issue.to_dict(),
            "run_hints": list(self.run_hints),
            "hints": self.hints.to_dict(),
            "hints_fallback": self.hints_fallback,
            "quality": self.quality,
            "summary": self.summary,
            "roadmap": [
                {"text": step.text, "actionUrl": step.action_url, "codeBlock": step.code_block}
                for step in self.roadmap
            ],
            "where_to_work_html": list(self.where_to_work_html),
            "what_to_change_html": list(self.what_to_change_html),
        }


def assemble(raw: Any, fallback: IssueTarget) -> StarterKitPayload:
    """Normalize a raw starter-kit response for the view addressed by ``fallback``.

    Raises BackendReportedError when the body carries an ``error`` field.
    """
    data = raw if isinstance(raw, dict) else {}
    if data.get("error"):
        raise BackendReportedError(_as_str(data["error"]))

    owner = _as_str(data.get("owner")) or fallback.owner
    repo = _as_str(data.get("repo")) or fallback.repo
    sha = _as_str(data.get("sha")) or None

    issue = IssueRef.from_api(data.get("issue"))
    if issue.number is None:
        issue = replace(issue, number=fallback.number)

    kit = StarterKitPayload(
        owner=owner,
        repo=repo,
        sha=sha,
        issue=issue,
        run_hints=_str_tuple(data.get("run_hints")),
        hints=HintSet.from_api(data.get("hints")),
        hints_fallback=bool(data.get("hints_fallback")),
    )
    logger.debug(
        "Assembled starter kit for %s/%s#%s (sha=%s, quality=%s)",
        kit.owner, kit.repo, kit.issue.number, kit.short_sha, kit.quality,
    )
    return kit
