"""
Shared pytest fixtures for advancedconfig tests.

Provides temporary data directories, ready-made stores and a clean logger
for every test.
"""

import sys
from pathlib import Path

import pytest

# Put `src/` first so `import advancedconfig` uses workspace code.
_REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_REPO_ROOT / "src"))

from advancedconfig.core.config import ConfigRegistry, ConfigStore  # noqa: E402
from advancedconfig.core.utils.logger import reset_logging  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_logger():
    """Drop logger handlers between tests so output never leaks across them."""
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Stand-in for a plugin's data folder."""
    path = tmp_path / "plugins" / "Demo"
    return path


@pytest.fixture
def registry() -> ConfigRegistry:
    return ConfigRegistry()


@pytest.fixture
def store(data_dir: Path, registry: ConfigRegistry) -> ConfigStore:
    """Store for ``<data_dir>/config.yml``."""
    return ConfigStore(data_dir, "config", registry=registry)
