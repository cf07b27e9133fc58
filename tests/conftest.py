import os
import sys

import pytest

# Allow running tests without installing the package.
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if BASE_DIR not in sys.path:
    sys.path.insert(0, BASE_DIR)

from rates_workbench.config import AppConfig  # noqa: E402
from rates_workbench.market import MarketLoader  # noqa: E402


@pytest.fixture
def cfg():
    return AppConfig()


@pytest.fixture
def curve(cfg):
    return MarketLoader(cfg).curve()
