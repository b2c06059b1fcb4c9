from __future__ import annotations

import pytest

from postcraft.rendering import sequential_ids


@pytest.fixture
def fallback_images() -> list[str]:
    return ["a", "b", "c"]


@pytest.fixture
def ids():
    """Deterministic code-block ids: code-1, code-2, ..."""
    return sequential_ids()


@pytest.fixture
def failing_generator():
    def _generate(**_: object) -> str:
        msg = "Canvas context not available"
        raise RuntimeError(msg)

    return _generate
