"""Shared test configuration and fixtures."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load .env from project root for all tests
root = Path(__file__).parent.parent.resolve()
load_dotenv(root / ".env")

# A prose paragraph long enough (19 words) never to count as a tiny cell
LONG_PARAGRAPH = "This paragraph has comfortably more than fifteen words so that it never counts as a tiny cell at all."


@pytest.fixture
def long_paragraph() -> str:
    """Return a paragraph that is never merged as a tiny cell."""
    return LONG_PARAGRAPH
