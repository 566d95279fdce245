"""Shared builders: hands are written in engine notation, suit first ("HA", "DT")."""
import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from poker_cards import Hand, parse_card  # noqa: E402


def cards(*codes, wild=(), dead=()):
    """Build cards; ``wild`` and ``dead`` list positions to flag."""
    built = []
    for i, code in enumerate(codes):
        built.append(parse_card(code, is_wild=i in wild, is_dead=i in dead))
    return built


def hand(*codes, wild=(), dead=()):
    return Hand(cards(*codes, wild=wild, dead=dead))


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
