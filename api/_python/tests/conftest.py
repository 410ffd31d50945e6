"""
Pytest fixtures for realignment plan tests.
"""

import sys
from pathlib import Path

import pytest
from loguru import logger

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from helpers import build_plan
from zoneshift.sample_plan import make_sample_plan


@pytest.fixture
def tokyo_plan():
    """UTC home -> Tokyo, 23:00 UTC bedtime, 8h sleep, 1h/day caps."""
    return build_plan()


@pytest.fixture
def sample_plan():
    """Los Angeles -> Taipei demo plan."""
    return make_sample_plan()


@pytest.fixture
def log_messages():
    """Capture loguru WARNING+ messages emitted during a test."""
    messages = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]), level="WARNING"
    )
    yield messages
    logger.remove(handler_id)
