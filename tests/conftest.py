from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from mtt.logging import reset_logging
from tests._fixtures.tree_builder import ModelTreeBuilder


@pytest.fixture
def model_tree(tmp_path: Path) -> ModelTreeBuilder:
    """Provide a reusable model tree rooted at the pytest tmp_path."""
    return ModelTreeBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_mtt_logger() -> Iterator[None]:
    """Drop handlers installed by CLI runs so they don't outlive captured streams."""
    yield
    reset_logging()
