import pytest

from ftpnav.ui.levenstein import _levenstein, get_suggestion


@pytest.mark.parametrize("a, b, expected", [
    ("", "abc", 3),
    ("abc", "", 3),
    ("kitten", "sitting", 3),
    ("put", "put", 0),
])
def test_distance(a, b, expected):
    assert _levenstein(a, b) == expected


def test_suggestion_for_typo():
    assert get_suggestion("conect") == "connect"
    assert get_suggestion("LMKDR") == "lmkdir"


def test_no_suggestion_when_too_far():
    assert get_suggestion("supercalifragilistic") == ""
