from __future__ import annotations

import random
from datetime import date
from pathlib import Path

import pytest

from qbdoc.synthesis import ParameterSynthesizer
from tests._fixtures.project_builder import ProjectBuilder


@pytest.fixture
def project_builder(tmp_path: Path) -> ProjectBuilder:
    """Provide a reusable Laravel project builder rooted at the pytest tmp_path."""
    return ProjectBuilder(tmp_path)


@pytest.fixture
def synthesizer() -> ParameterSynthesizer:
    """Synthesizer with a seeded random source and a fixed date."""
    return ParameterSynthesizer(rng=random.Random(7), today=lambda: date(2024, 5, 17))
