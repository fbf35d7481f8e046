# tests/conftest.py
"""Shared test fixtures.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from tamperline.contracts import TamperableItem
from tamperline.plugins.manager import PluginManager


@pytest.fixture
def item() -> TamperableItem:
    """A minimal item handle, as the runner would pass it."""
    return TamperableItem(source={}, run_id="test-run")


@pytest.fixture
def plugin_manager() -> PluginManager:
    """Plugin manager with the built-in tampers registered."""
    manager = PluginManager()
    manager.register_builtin_plugins()
    return manager


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    """A settings file rewriting the 'title' field."""
    path = tmp_path / "settings.yaml"
    path.write_text(
        """
logging:
  level: INFO
fields:
  title:
    - plugin: string_replace_multiple
      options:
        allowed_values: |
          ReplaceMe|Found
          Colour|Color
        trim_right: 5
"""
    )
    return path


# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
