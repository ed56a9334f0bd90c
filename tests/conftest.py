"""
Root conftest.py for plan-ingest tests.

This file provides:
1. Common pytest markers for test categorization
2. Sample plan texts in every supported input format
3. Environment fixtures for configuration tests
"""

from __future__ import annotations

import logging

import pytest

# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        norm = str(item.fspath).replace("\\", "/")

        if "/tests/unit/cli/" in norm:
            item.add_marker(pytest.mark.cli)
        if "/tests/unit/grammars/" in norm:
            item.add_marker(pytest.mark.grammar)


def pytest_configure(config):
    """Register custom markers."""
    for name, desc in [
        ("cli", "CLI command tests"),
        ("grammar", "Single-grammar tests"),
    ]:
        config.addinivalue_line("markers", f"{name}: {desc}")


# =============================================================================
# ENVIRONMENT FIXTURES
# =============================================================================


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove plan-ingest configuration variables from the environment."""
    for var in (
        "PLAN_INGEST_GRAMMARS",
        "PLAN_INGEST_MAX_INPUT_CHARS",
        "PLAN_INGEST_LOG_LEVEL",
        "PLAN_INGEST_LOG_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def reset_logging():
    """Restore the plan_ingest logger after a test reconfigures it."""
    logger = logging.getLogger("plan_ingest")
    level, handlers = logger.level, list(logger.handlers)
    yield logger
    logger.setLevel(level)
    logger.handlers = handlers


# =============================================================================
# SAMPLE PLANS
# =============================================================================


@pytest.fixture
def json_plan() -> str:
    """A clean JSON plan in the prompted schema."""
    return """\
{
  "phases": [
    {"name": "Setup", "hours": "2-4", "tasks": ["Init repo", "Install deps"]},
    {"name": "Build", "hours": "8-12", "tasks": ["Write models", "Write API", "Add tests"]}
  ]
}"""


@pytest.fixture
def messy_json_reply() -> str:
    """An assistant reply wrapping defective JSON in prose and a fence."""
    return """\
Sure! Here’s your plan:

```json
{
  // generated plan
  “phases”: [
    {
      "title": "Design",
      "duration": "1 day",
      "items": [
        {"task": "Sketch **wireframes**", "checked": true},
        {"task": "Review with team"},
      ],
    },
  ],
}
```

Let me know if you want changes.
"""


@pytest.fixture
def markdown_plan() -> str:
    """A markdown plan with headings and checkboxes."""
    return """\
# Todo App

## Phase 1: Setup (2-4 hours)

- [ ] Init repo
- [x] Install deps

## Phase 2: Core

Some notes that are not tasks.

- [ ] Add `Task` model
- [X] ~~Remove legacy code~~
"""


@pytest.fixture
def ai_text_plan() -> str:
    """Assistant-style text with Phase/Step headers."""
    return """\
Here is a plan for your project.

Phase 1: Design
1. Wireframe
2. Review

Phase 2: Build
- Implement
- Test
"""


@pytest.fixture
def bullet_plan() -> str:
    """A flat bullet list with no headers."""
    return "- Buy milk\n- Walk dog\n- Call mom"
