import pytest

from cubed.colornames import lookup_color


@pytest.mark.parametrize(
    "name, expected",
    [
        ("snow", 0xFFFAFA),
        ("red", 0xFF0000),
        ("navy", 0x80),
        ("cornflowerblue", 0x6495ED),
        ("lightgreen", 0x90EE90),
        ("thistle4", 0x8B7B8B),
        ("gray50", 0x7F7F7F),
    ],
)
def test_known_names(name, expected):
    assert lookup_color(name) == expected


def test_lookup_ignores_case():
    assert lookup_color("ReD") == lookup_color("red")
    assert lookup_color("GHOST WHITE") == 0xF8F8FF


def test_none_is_transparent():
    assert lookup_color("none") == -1
    assert lookup_color("NONE") == -1


def test_unknown_name():
    assert lookup_color("no-such-colour") is None
    assert lookup_color("") is None


def test_first_duplicate_wins():
    assert lookup_color("dark slate") == 0x2F4F4F
    assert lookup_color("light slate") == 0x778899
    assert lookup_color("light goldenrod") == 0xFAFAD2


@pytest.mark.parametrize("level", range(101))
def test_gray_and_grey_agree(level):
    gray = lookup_color(f"gray{level}")
    assert gray == lookup_color(f"grey{level}")
    red, green, blue = gray >> 16, (gray >> 8) & 0xFF, gray & 0xFF
    assert red == green == blue


def test_gray_extremes():
    assert lookup_color("gray0") == lookup_color("black")
    assert lookup_color("gray100") == lookup_color("white")


def test_gray_levels_increase():
    values = [lookup_color(f"gray{level}") for level in range(101)]
    assert values == sorted(values)
    assert len(set(values)) == 101


def test_numbered_shade_one_matches_base_where_source_agrees():
    assert lookup_color("red1") == lookup_color("red")
    assert lookup_color("blue1") == lookup_color("blue")
    assert lookup_color("snow1") == lookup_color("snow")