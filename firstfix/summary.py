from __future__ import annotations

import re

from .config import EMPTY_BODY_FALLBACK, SUMMARY_ELLIPSIS, SUMMARY_MAX_CHARS
from .models import IssueRef

_PARAGRAPH_BREAK = re.compile(r"\n{2,}")


def summarize_issue(issue: IssueRef | None) -> str:
    """Short display summary: curated summary first, else the body's first paragraph."""
    if issue is None:
        return EMPTY_BODY_FALLBACK
    if issue.summary:
        return issue.summary
    body = (issue.body_text or "").strip()
    if not body:
        return EMPTY_BODY_FALLBACK
    first_para = _PARAGRAPH_BREAK.split(body, maxsplit=1)[0]
    if len(first_para) > SUMMARY_MAX_CHARS:
        return first_para[:SUMMARY_MAX_CHARS] + SUMMARY_ELLIPSIS
    return first_para
