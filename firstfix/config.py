"""Configuration constants for FirstFix."""

import os

# Backend service
API_BASE = os.environ.get("FIRSTFIX_API_BASE", "http://localhost:5001")
SEARCH_PATH = "/api/search"
STARTER_KIT_PATH = "/api/starter_kit"

# Source links
GITHUB_BASE = "https://github.com"
DEFAULT_BRANCH = "main"  # used when the payload carries no commit sha

# Issue summary policy
SUMMARY_MAX_CHARS = 300
SUMMARY_ELLIPSIS = "…"
EMPTY_BODY_FALLBACK = (
    "No description provided by the repository. Read the issue carefully on GitHub."
)

# ── Search page ──────────────────────────────────────────────
DEFAULT_SKILLS = "python, flask"
MAX_CARD_TAGS = 3  # per kind: labels, topics

# ── Starter kit page ─────────────────────────────────────────
HINTS_FALLBACK_NOTE = (
    "Generated quickly due to a slow model response; results may be less specific."
)
NO_RUN_HINTS_NOTE = "No run hints detected yet. Check the README and package files."
