"""Pytest configuration for the localkeys test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 300 examples (thorough property testing)
- ci: GitHub Actions with 50 examples (fast CI feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- HYPOTHESIS_PROFILE env var -> explicit override
- CI=true environment variable -> "ci" profile (GitHub Actions sets this)
- Otherwise -> "dev" profile (local development)

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/

Fuzzing Test Separation:
Tests marked with @pytest.mark.fuzz are excluded from normal test runs.
Run them via: pytest -m fuzz
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from localkeys.keys import LanguageId
from localkeys.localization import ClientConfig, LocalizationClient

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=300,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var (GitHub Actions auto-detection)
    3. Default to "dev" (local development)
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# FUZZING TEST SEPARATION
# =============================================================================


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz-marked tests unless explicitly requested with ``-m fuzz``."""
    marker_expr = config.getoption("-m", default="")
    if "fuzz" in str(marker_expr):
        return

    skip_fuzz = pytest.mark.skip(reason="Fuzzing test - run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)


# =============================================================================
# SHARED FIXTURES
# =============================================================================

EN_DOCUMENT = """\
UI:
  menu:
    $: Menu Root
    start: Start Game
    quit: Quit
  credits:
    - Alice
    - Bob
dialog:
  intro line: Welcome, traveller.
"""

DE_DOCUMENT = """\
UI:
  menu:
    $: Hauptmenü
    start: Spiel starten
"""


@pytest.fixture
def documents() -> dict[str, str]:
    """English and German documents keyed by language id."""
    return {"en": EN_DOCUMENT, "de": DE_DOCUMENT}


@pytest.fixture
def config(documents: dict[str, str]) -> ClientConfig:
    """In-memory config with English as the default language."""
    return ClientConfig.from_mapping(documents, default_language="en")


@pytest.fixture
def client(config: ClientConfig) -> LocalizationClient:
    """Client over the in-memory documents, no language selected yet."""
    return LocalizationClient(config)


@pytest.fixture
def lang_dir(tmp_path: Path) -> Path:
    """Directory with lang_en.yaml, lang_DE.yml and an unrelated file."""
    (tmp_path / "lang_en.yaml").write_text(EN_DOCUMENT, encoding="utf-8")
    (tmp_path / "lang_DE.yml").write_text(DE_DOCUMENT, encoding="utf-8")
    (tmp_path / "README.txt").write_text("not a language", encoding="utf-8")
    return tmp_path


@pytest.fixture
def en() -> LanguageId:
    return LanguageId("en")


@pytest.fixture
def de() -> LanguageId:
    return LanguageId("de")
