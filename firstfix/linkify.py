"""Turn ``(path: start-end)`` references in hint text into source links.

The grammar is deliberately small: an opening parenthesis, a path without
whitespace or parentheses, a colon, optional whitespace, a start line, a
hyphen or en-dash, an end line and a closing parenthesis. Matching is
leftmost and non-overlapping; everything else is passed through untouched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from bs4 import BeautifulSoup
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from .config import DEFAULT_BRANCH, GITHUB_BASE
from .models import LinkContext

CODE_REF_RE = re.compile(r"\(([^\s()]+):\s*(\d+)[–-](\d+)\)")


class _InsertionOrderFormatter(HTMLFormatter):
    """Minimal escaping; attributes in the order they were set (href, target, rel)."""

    def __init__(self):
        super().__init__(entity_substitution=EntitySubstitution.substitute_xml)

    def attributes(self, tag):
        return list(tag.attrs.items()) if tag.attrs else []


_FORMATTER = _InsertionOrderFormatter()


@dataclass(frozen=True)
class CodeLink:
    path: str
    start: str
    end: str
    url: str

    @property
    def label(self) -> str:
        return f"{self.path}:{self.start}-{self.end}"


def blob_url(ctx: LinkContext, path: str, start: str | None = None, end: str | None = None) -> str:
    base = f"{GITHUB_BASE}/{ctx.owner}/{ctx.repo}/blob/{ctx.sha or DEFAULT_BRANCH}/{path}"
    # Without a sha the line numbers may have drifted; link the file only.
    if ctx.sha and start is not None and end is not None:
        return f"{base}#L{start}-L{end}"
    return base


def split_references(text: str | None, ctx: LinkContext) -> list[str | CodeLink]:
    """Split ``text`` into plain strings and :class:`CodeLink` parts, in order."""
    if not text:
        return []
    parts: list[str | CodeLink] = []
    pos = 0
    for match in CODE_REF_RE.finditer(text):
        if match.start() > pos:
            parts.append(text[pos:match.start()])
        path, start, end = match.groups()
        parts.append(CodeLink(path=path, start=start, end=end, url=blob_url(ctx, path, start, end)))
        pos = match.end()
    if pos < len(text):
        parts.append(text[pos:])
    return parts


def anchor_html(link: CodeLink) -> str:
    """Render one link as an ``<a>`` element opened in a new tab with no referrer."""
    soup = BeautifulSoup("", "html.parser")
    tag = soup.new_tag("a", attrs={"href": link.url, "target": "_blank", "rel": "noreferrer"})
    tag.string = link.label
    return tag.decode(formatter=_FORMATTER)


def linkify(text: str | None, ctx: LinkContext) -> str | None:
    if not text:
        return text
    out: list[str] = []
    for part in split_references(text, ctx):
        if isinstance(part, CodeLink):
            out.append(f"({anchor_html(part)})")
        else:
            out.append(part)
    return "".join(out)
