"""
Pytest fixtures shared by the test suite.

The Spotify Web API is faked with ``httpx.MockTransport`` so the real client,
error classification and payload validation all run without network access.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path so tests can import the genrelens package
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from tests.fakes import FakeSpotify  # noqa: E402


@pytest.fixture
def fake_spotify() -> FakeSpotify:
    return FakeSpotify()
