import pytest
from awsswitch.utils.selection import filter_names, select_profile

NAMES = ["dev", "dev-admin", "staging", "prod"]


def answers(*values):
    """Build an input function returning values in order."""
    pending = list(values)

    def _input(prompt):
        value = pending.pop(0)
        if isinstance(value, BaseException):
            raise value
        return value
    return _input


def test_select_by_number():
    """Test choosing an entry by its number."""
    lines = []

    index = select_profile(NAMES, input_func=answers("3"), output=lines.append)

    assert index == 2
    assert "   1) dev" in lines


def test_select_by_unique_filter():
    """Test that a filter with one match selects it."""
    assert select_profile(NAMES, input_func=answers("STAG"), output=lambda s: None) == 2


def test_select_exact_name_wins():
    """Test that an exact name is chosen even when it is also a prefix."""
    assert select_profile(NAMES, input_func=answers("dev"), output=lambda s: None) == 0


def test_select_numeric_name_wins_over_position():
    """Test that a profile named like a number is chosen by name."""
    names = ["dev", "2024", "prod"]

    assert select_profile(names, input_func=answers("2024"), output=lambda s: None) == 1
    assert select_profile(names, input_func=answers("3"), output=lambda s: None) == 2



def test_select_narrow_then_number():
    """Test that numbers refer to the filtered list after narrowing."""
    lines = []

    index = select_profile(NAMES, input_func=answers("ev", "2"), output=lines.append)

    assert index == 1
    assert lines[-1] == "   2) dev-admin"


def test_select_no_match_then_retry():
    """Test that a filter with no matches asks again."""
    lines = []

    index = select_profile(NAMES, input_func=answers("qa", "prod"), output=lines.append)

    assert index == 3
    assert "No profiles match 'qa'" in lines


def test_select_out_of_range_then_retry():
    """Test that an invalid number asks again."""
    lines = []

    index = select_profile(NAMES, input_func=answers("9", "1"), output=lines.append)

    assert index == 0
    assert "No entry 9, choose 1-4" in lines


@pytest.mark.parametrize("answer", ["", "   ", EOFError(), KeyboardInterrupt()])
def test_select_cancelled(answer):
    """Test that blank input, EOF and Ctrl-C mean no selection."""
    assert select_profile(NAMES, input_func=answers(answer), output=lambda s: None) is None


def test_select_empty_list():
    """Test that an empty list returns no selection without prompting."""
    def _input(prompt):
        raise AssertionError("should not prompt")

    assert select_profile([], input_func=_input, output=lambda s: None) is None


def test_filter_names():
    """Test case-insensitive substring filtering."""
    assert filter_names(NAMES, "DEV") == [0, 1]
    assert filter_names(NAMES, "x") == []
