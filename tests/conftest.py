"""Test configuration and fixtures."""

from datetime import datetime, timezone

import pytest

from ghkit.github_client.models import ItemState, TrackerComment, TrackerItem

from .helpers import FakeGit


@pytest.fixture
def fake_git() -> FakeGit:
    return FakeGit()


@pytest.fixture
def sample_issue() -> TrackerItem:
    """Open issue with one comment."""
    return TrackerItem(
        number=42,
        title="Login fails on timeout",
        state=ItemState.OPEN,
        author="alice",
        labels=["bug"],
        assignees=["bob"],
        body="Steps to reproduce",
        created_at=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        updated_at=datetime(2024, 1, 3, 3, 4, 5, tzinfo=timezone.utc),
        comments=[
            TrackerComment(
                author="carol",
                body="Confirmed",
                created_at=datetime(2024, 1, 2, 10, 0, 0, tzinfo=timezone.utc),
            )
        ],
    )
