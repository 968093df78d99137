"""FirstFix: find beginner-friendly issues and get a starter kit for one.

- Search issues matching a comma-separated list of skills
- Render a starter kit: issue summary, contribution roadmap, hints with
  links into the repository source, and run hints
"""

__version__ = "1.0.0"
