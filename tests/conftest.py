"""Shared fixtures."""

import pytest


@pytest.fixture
def no_sleep():
    """Record backoff delays instead of sleeping."""
    delays = []
    return delays.append, delays


@pytest.fixture
def anchored_page():
    """HTML with a section anchor as an id."""
    def _page(anchor: str) -> str:
        return f'<html><body><h2 id="{anchor}">Section</h2></body></html>'
    return _page
