"""Test helpers for petition registry tests.

Helpers:
    FakeBlockHeight: Controllable block height for deterministic tests
    make_petition: Valid Petition record with per-test overrides

Usage:
    from tests.helpers import FakeBlockHeight, make_petition
"""

from tests.helpers.fake_block_height import FakeBlockHeight
from tests.helpers.petition_factory import make_petition

__all__ = ["FakeBlockHeight", "make_petition"]
