from __future__ import annotations

import random
import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    project_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(project_root))


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def small_settings():
    from termsnake.config import GameSettings

    return GameSettings(width=10, height=10, sidebar_width=0, timed_food=False)


@pytest.fixture()
def surface():
    from tests.helpers import FakeSurface

    return FakeSurface()
