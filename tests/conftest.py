"""Shared fixtures for the Caesar toolkit tests."""

import pytest
from click.testing import CliRunner

from shared.config import ToolkitConfig
from caesar.core.engine import CaesarEngine


ENGLISH_PASSAGE = (
    "It was the best of times, it was the worst of times, it was the age of "
    "wisdom, it was the age of foolishness, it was the epoch of belief, it "
    "was the epoch of incredulity, it was the season of Light, it was the "
    "season of Darkness, it was the spring of hope, it was the winter of "
    "despair, we had everything before us, we had nothing before us, we were "
    "all going direct to Heaven, we were all going direct the other way."
)


@pytest.fixture
def passage() -> str:
    return ENGLISH_PASSAGE


@pytest.fixture
def config() -> ToolkitConfig:
    return ToolkitConfig()


@pytest.fixture
def engine(config: ToolkitConfig) -> CaesarEngine:
    return CaesarEngine(config)


@pytest.fixture
def broken_reference() -> tuple[float, ...]:
    from caesar.core.alphabet import ENGLISH_FREQUENCIES

    table = list(ENGLISH_FREQUENCIES)
    table[9] = 0.0  # J
    return tuple(table)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()
