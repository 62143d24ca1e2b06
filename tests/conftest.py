"""
Shared fixtures.
"""

import pytest

from hand_factory import create_hand


@pytest.fixture
def make_hand():
    """Factory fixture for synthetic hands."""
    return create_hand
