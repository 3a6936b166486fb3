"""Pytest configuration and shared fixtures for the mathmd test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging
import os

import pytest
from hypothesis import Phase, Verbosity, settings

from mathmd.api import get_default_engine

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "security: Tests for injection and URL sanitization guarantees")
    config.addinivalue_line("markers", "fuzzing: Property-based tests using Hypothesis")


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Keep MATHMD_* variables from the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("MATHMD_"):
            monkeypatch.delenv(name, raising=False)
    get_default_engine.cache_clear()
    yield
    get_default_engine.cache_clear()


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Undo handler and level changes made by tests that call configure_logging."""
    root = logging.getLogger()
    package_logger = logging.getLogger("mathmd")
    handlers = list(root.handlers)
    level = root.level
    package_level = package_logger.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    package_logger.setLevel(package_level)


@pytest.fixture
def sample_problem() -> str:
    """Provide a problem statement using every supported construct.

    Returns
    -------
    str
        Sample author text.

    """
    return """# Problem 1

Let **a** and *b* be integers with `a < b`.

- first hint
- second hint

1. step one
2. step two

> Note: see [the notes](https://example.com/notes).

$$
a^2 + b^2 = c^2
$$

| n | n^2 |
|:--|---:|
| 1 | 1 |
| 2 | 4 |

- [x] read the statement
- [ ] solve it

![diagram](https://example.com/fig.png)

```python
print("a < b")
```
"""
