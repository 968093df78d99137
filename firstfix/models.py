from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from typing import Any

_TARGET_RE = re.compile(r"^\s*([^\s/#]+)/([^\s/#]+)#(\d+)\s*$")
_ISSUE_URL_RE = re.compile(r"github\.com/([^/\s]+)/([^/\s]+)/issues/(\d+)")


def _as_mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _str_tuple(value: Any) -> tuple[str, ...]:
    """Coerce a JSON array of strings; anything else becomes empty."""
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(_as_str(item) for item in value if item is not None)


def _names(value: Any) -> tuple[str, ...]:
    # Labels/topics arrive either as plain strings or as {"name": ...} nodes.
    if not isinstance(value, (list, tuple)):
        return ()
    out: list[str] = []
    for item in value:
        if isinstance(item, dict):
            item = item.get("name")
        if item:
            out.append(_as_str(item))
    return tuple(out)


@dataclass(frozen=True)
class IssueRef:
    id: str
    number: int | None
    title: str
    url: str
    body_text: str = ""
    summary: str | None = None
    updated_at: str = ""
    labels: tuple[str, ...] = ()

    @classmethod
    def from_api(cls, payload: Any) -> "IssueRef":
        data = _as_mapping(payload)
        summary = data.get("summary")
        return cls(
            id=_as_str(data.get("id")),
            number=_as_int(data.get("number")),
            title=_as_str(data.get("title")),
            url=_as_str(data.get("url")),
            body_text=_as_str(data.get("bodyText")),
            summary=summary if isinstance(summary, str) else None,
            updated_at=_as_str(data.get("updatedAt")),
            labels=_names(data.get("labels")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "number": self.number,
            "title": self.title,
            "url": self.url,
            "bodyText": self.body_text,
            "summary": self.summary,
            "updatedAt": self.updated_at,
            "labels": list(self.labels),
        }


@dataclass(frozen=True)
class RepoRef:
    name_with_owner: str
    url: str
    stargazer_count: int = 0
    primary_language: str | None = None
    topics: tuple[str, ...] = ()

    @property
    def owner(self) -> str:
        return self.name_with_owner.split("/")[0]

    @property
    def name(self) -> str:
        parts = self.name_with_owner.split("/")
        return parts[1] if len(parts) > 1 else ""

    @classmethod
    def from_api(cls, payload: Any) -> "RepoRef":
        data = _as_mapping(payload)
        language = data.get("primaryLanguage")
        if isinstance(language, dict):
            language = language.get("name")
        return cls(
            name_with_owner=_as_str(data.get("nameWithOwner")),
            url=_as_str(data.get("url")),
            stargazer_count=_as_int(data.get("stargazerCount")) or 0,
            primary_language=_as_str(language) or None,
            topics=_names(data.get("topics")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "nameWithOwner": self.name_with_owner,
            "url": self.url,
            "stargazerCount": self.stargazer_count,
            "primaryLanguage": self.primary_language,
            "topics": list(self.topics),
        }


@dataclass(frozen=True)
class IssueTarget:
    """Address of an issue detail view: the (owner, repo, number) triple."""

    owner: str
    repo: str
    number: int

    @property
    def key(self) -> str:
        return f"{self.owner}/{self.repo}#{self.number}"

    @classmethod
    def parse(cls, text: str) -> "IssueTarget | None":
        """Parse ``owner/repo#123`` or a GitHub issue URL."""
        text = (text or "").strip()
        match = _TARGET_RE.match(text) or _ISSUE_URL_RE.search(text)
        if not match:
            return None
        owner, repo, number = match.groups()
        return cls(owner=owner, repo=repo, number=int(number))


@dataclass(frozen=True)
class SearchResultCard:
    repo: RepoRef
    issue: IssueRef

    @classmethod
    def from_api(cls, payload: Any) -> "SearchResultCard":
        data = _as_mapping(payload)
        return cls(repo=RepoRef.from_api(data.get("repo")), issue=IssueRef.from_api(data.get("issue")))

    def navigation_target(self) -> IssueTarget | None:
        """Triple for the starter kit view, or None when any part is missing."""
        if self.repo.name_with_owner.count("/") != 1:
            return None
        owner, repo = self.repo.owner, self.repo.name
        number = self.issue.number
        if not owner or not repo or not number:
            return None
        return IssueTarget(owner=owner, repo=repo, number=number)

    def to_dict(self) -> dict[str, Any]:
        return {"repo": self.repo.to_dict(), "issue": self.issue.to_dict()}


@dataclass(frozen=True)
class HintSet:
    high_level_goal: str = ""
    where_to_work: tuple[str, ...] = ()
    what_to_change: tuple[str, ...] = ()
    how_to_verify: tuple[str, ...] = ()
    gotchas: tuple[str, ...] = ()

    @classmethod
    def from_api(cls, payload: Any) -> "HintSet":
        data = _as_mapping(payload)
        return cls(
            high_level_goal=_as_str(data.get("high_level_goal")),
            where_to_work=_str_tuple(data.get("where_to_work")),
            what_to_change=_str_tuple(data.get("what_to_change")),
            how_to_verify=_str_tuple(data.get("how_to_verify")),
            gotchas=_str_tuple(data.get("gotchas")),
        )

    @property
    def is_empty(self) -> bool:
        return not (
            self.high_level_goal
            or self.where_to_work
            or self.what_to_change
            or self.how_to_verify
            or self.gotchas
        )

    def to_dict(self) -> dict[str, Any]:
        return {key: list(value) if isinstance(value, tuple) else value for key, value in asdict(self).items()}


@dataclass(frozen=True)
class RoadmapStep:
    text: str
    action_url: str | None = None
    code_block: str | None = None


@dataclass(frozen=True)
class LinkContext:
    owner: str
    repo: str
    sha: str | None = None


@dataclass(frozen=True)
class SearchResults:
    skills: str
    cards: tuple[SearchResultCard, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {"skills": self.skills, "items": [card.to_dict() for card in self.cards]}
