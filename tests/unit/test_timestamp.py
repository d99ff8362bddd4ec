"""Unit tests for timestamp helpers."""

import re

import pytest

from optbook.utils.timestamp import format_elapsed, now

pytestmark = pytest.mark.unit


def test_now_is_filesystem_safe():
    """Test now() yields a YYYYMMDD_HHMMSS stamp."""
    assert re.fullmatch(r"\d{8}_\d{6}", now())


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0.42, "0.42s"),
        (59.5, "59.50s"),
        (75.0, "1m 15s"),
        (3600.0, "60m 0s"),
    ],
)
def test_format_elapsed(seconds, expected):
    assert format_elapsed(seconds) == expected
