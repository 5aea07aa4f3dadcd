"""Unit tests for time formatting."""

from datetime import timedelta

import pytest

from talkback.util.time import time_ago
from tests.conftest import NOW


class TestTimeAgo:
    """Tests for time_ago function."""

    @pytest.mark.parametrize(
        "delta, expected",
        [
            (timedelta(seconds=30), "Just now"),
            (timedelta(seconds=90), "A minute ago"),
            (timedelta(minutes=5), "5 minutes ago"),
            (timedelta(hours=1, minutes=10), "An hour ago"),
            (timedelta(hours=7), "7 hours ago"),
            (timedelta(days=1, hours=3), "Yesterday"),
            (timedelta(days=12), "12 days ago"),
            (timedelta(days=45), "A month ago"),
            (timedelta(days=100), "3 months ago"),
            (timedelta(days=400), "A year ago"),
            (timedelta(days=1000), "2 years ago"),
        ],
    )
    def test_intervals(self, delta, expected):
        assert time_ago(NOW, NOW - delta) == expected

    def test_future_is_just_now(self):
        """Clock skew must not produce negative intervals."""
        assert time_ago(NOW, NOW + timedelta(minutes=3)) == "Just now"
