import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'filterkit' and tests/ importable for 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from filterkit.core.stdlib_logging import reset_logging


@pytest.fixture(autouse=True)
def isolated_config_env(tmp_path, monkeypatch):
    """Point the config home at a temp dir and drop leaked FILTERKIT_* overrides.

    Returns:
        Path of the isolated config home.
    """
    for key in list(os.environ.keys()):
        if key.startswith("FILTERKIT_"):
            monkeypatch.delenv(key, raising=False)
    home = tmp_path / "filterkit-home"
    monkeypatch.setenv("FILTERKIT_HOME", str(home))
    yield home
    reset_logging()


@pytest.fixture
def counter_ids():
    """Deterministic identity generator (block-1, block-2, ...)."""
    from filterkit.core.codec import CounterIdentityFactory

    return CounterIdentityFactory()
