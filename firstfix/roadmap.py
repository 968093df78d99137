"""Generic contribution steps shown on every starter kit."""

from __future__ import annotations

from .config import GITHUB_BASE
from .models import RoadmapStep

# Illustrative only; the target project's real setup lives in its README.
INSTALL_EXAMPLE = (
    "# Python example\n"
    "python -m venv .venv\n"
    "source .venv/bin/activate\n"
    "pip install -r requirements.txt"
)


def build_roadmap(owner: str, repo: str, issue_number: int | str) -> tuple[RoadmapStep, ...]:
    repo_url = f"{GITHUB_BASE}/{owner}/{repo}"
    return (
        RoadmapStep("Fork the repo on GitHub", action_url=repo_url),
        RoadmapStep(
            "Clone your fork locally",
            code_block=f"git clone {GITHUB_BASE}/<your-username>/{repo}.git",
        ),
        RoadmapStep(
            "Create a new branch",
            code_block=f"cd {repo}\ngit checkout -b fix/issue-{issue_number}",
        ),
        RoadmapStep("Install dependencies (adjust to project)", code_block=INSTALL_EXAMPLE),
        RoadmapStep("Run the project / tests (see run hints below)"),
        RoadmapStep('Make the change following the suggestions in "Hints & ideas"'),
        RoadmapStep(
            "Commit & push",
            code_block=(
                "git add -A\n"
                f'git commit -m "Fix: {repo} issue #{issue_number}"\n'
                "git push -u origin HEAD"
            ),
        ),
        RoadmapStep(f"Open a Pull Request referencing #{issue_number}", action_url=f"{repo_url}/compare"),
    )
