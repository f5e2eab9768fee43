import pytest

from household_inventory.utils.colors import BLACK, WHITE, brightness, text_color_for


@pytest.mark.parametrize(
    "background, expected",
    [
        ("#FFFFFF", BLACK),
        ("#000000", WHITE),
        ("bad", BLACK),
        ("", BLACK),
        ("#1234567", BLACK),
        ("123456", WHITE),
        ("#F5DEB3", BLACK),
        ("#808080", WHITE),
    ],
)
def test_text_color_for(background, expected):
    assert text_color_for(background) == expected


def test_brightness_weighting():
    # (18*299 + 52*587 + 86*114) // 1000
    assert brightness("123456") == 45
    assert brightness("#FFFFFF") == 255


def test_boundary_is_strictly_greater_than_150():
    assert brightness("#969696") == 150
    assert text_color_for("#969696") == WHITE
    assert brightness("#979797") == 151
    assert text_color_for("#979797") == BLACK


def test_invalid_pairs_count_as_zero():
    # "zz" is not hex, the red channel reads as 0 while green and blue still count
    assert brightness("#zzFFFF") == (255 * 587 + 255 * 114) // 1000
    assert text_color_for("#zzFFFF") == BLACK
    assert text_color_for("#FFzzzz") == WHITE


def test_never_raises_on_non_strings():
    assert text_color_for(None) == BLACK  # type: ignore[arg-type]
