import pytest

from tollscope.colors import DEFAULT_COLOR, GROUP_COLORS, color_for_group, legend_entries


def test_known_groups():
    assert color_for_group("Natural") == "green"
    assert color_for_group("Technological") == "red"


@pytest.mark.parametrize("group", ["Earthquake", "", "natural", None, 3])
def test_fallback(group):
    assert color_for_group(group) == DEFAULT_COLOR == "gray"


def test_legend_entries():
    entries = legend_entries()
    assert entries[:-1] == list(GROUP_COLORS.items())
    assert entries[-1] == ("Other", "gray")
