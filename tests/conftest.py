import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def black_rgb():
    return np.zeros((90, 90, 3), np.uint8)


@pytest.fixture
def white_rgb():
    return np.full((90, 90, 3), 255, np.uint8)


@pytest.fixture
def mixed_rgb():
    """3x3 grid of 30px cells: first five cells black, last four white.

    The whole-image mean is 4/9 * 255 (medium) while most of the area is dark.
    """
    rgb = np.zeros((90, 90, 3), np.uint8)
    for index in range(5, 9):
        row, col = divmod(index, 3)
        rgb[row * 30 : (row + 1) * 30, col * 30 : (col + 1) * 30] = 255
    return rgb


@pytest.fixture
def clean_lighting_env(monkeypatch):
    """Strip configuration overrides inherited from the developer shell."""
    import os

    for key in list(os.environ):
        if key.startswith("PLANTLIGHT_LIGHTING__"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    yield monkeypatch
