"""Pytest configuration for the msgcatalog test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 500 examples (thorough property testing)
- ci: CI runs with 50 examples (fast feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- HYPOTHESIS_PROFILE env var -> explicit override
- CI=true environment variable -> "ci" profile
- Otherwise -> "dev" profile (local development)

Fuzzing Test Separation:
Tests marked with @pytest.mark.fuzz are excluded from normal test runs.
Run them via: pytest -m fuzz
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from msgcatalog import Locale

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=500,
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
    """Pick the Hypothesis profile: HYPOTHESIS_PROFILE, then CI, then dev."""
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


def pytest_configure(config: pytest.Config) -> None:
    """Register the 'fuzz' marker for intensive property tests."""
    config.addinivalue_line(
        "markers",
        "fuzz: Intensive property tests for fuzzing (excluded from normal test runs)",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip fuzz-marked tests unless requested with ``-m fuzz``."""
    if "fuzz" in str(config.getoption("-m", default="")):
        return

    skip_fuzz = pytest.mark.skip(reason="Fuzzing test - run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)


# =============================================================================
# SHARED CATALOGS
# =============================================================================

FRENCH_MAIN = {
    "": {
        "domain": "main",
        "language": "fr",
        "nplurals": "1",
        "plural": "(n > 1)",
    },
    "Search": "Recherche",
    "Hello %s": "Bonjour %s",
    "Hello %(name)s": "Bonjour %(name)s",
    "You have one mail": "Vous avez un courriel",
    "You have %d mails": ["Vous avez %d courriels"],
    "Untranslated": "",
    "Pending": None,
}

RUSSIAN_FILES = {
    "": {
        "nplurals": "3",
        "plural": "(n%10==1 && n%100!=11 ? 0 : n%10>=2 && n%10<=4 && (n%100<10 || n%100>=20) ? 1 : 2)",
    },
    "One file": "Один файл",
    "%d files": ["%d файл", "%d файла", "%d файлов"],
}


@pytest.fixture
def french_main() -> dict[str, object]:
    """French 'main' catalog with a one-clause plural rule."""
    return {key: (dict(value) if isinstance(value, dict) else value) for key, value in FRENCH_MAIN.items()}


@pytest.fixture
def russian_files() -> dict[str, object]:
    """Russian catalog with a three-clause plural rule."""
    return {key: (dict(value) if isinstance(value, dict) else value) for key, value in RUSSIAN_FILES.items()}


@pytest.fixture
def locale(french_main: dict[str, object]) -> Locale:
    """French Locale with 'main' as its default domain."""
    return Locale("fr_FR", "main", french_main)
