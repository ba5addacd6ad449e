import pytest

from benchconductor.merror import MultiError, maybe_multi_error


def test_single_error_is_returned_unchanged():
    err = ValueError("boom")
    assert maybe_multi_error(err) is err


def test_none_further_errors_are_ignored():
    err = ValueError("boom")
    assert maybe_multi_error(err, None, None) is err


def test_no_errors_gives_none():
    assert maybe_multi_error(None) is None
    assert maybe_multi_error(None, None) is None


def test_none_base_with_further_error_builds_multi_error():
    err = RuntimeError("late")
    result = maybe_multi_error(None, err)
    assert isinstance(result, MultiError)
    assert result.errors == [err]


def test_two_errors_are_combined_in_order():
    first = ValueError("first")
    second = OSError("second")
    result = maybe_multi_error(first, None, second)
    assert isinstance(result, MultiError)
    assert result.errors == [first, second]
    text = str(result)
    assert "first" in text and "second" in text
    assert text.index("first") < text.index("second")


def test_nested_multi_errors_are_flattened():
    a, b, c = ValueError("a"), ValueError("b"), ValueError("c")
    result = maybe_multi_error(MultiError([a, b]), c)
    assert result.errors == [a, b, c]


def test_multi_error_can_be_raised_and_caught():
    a, b = ValueError("a"), KeyError("b")
    with pytest.raises(MultiError) as info:
        raise maybe_multi_error(a, b)
    assert info.value.errors == [a, b]


def test_description_counts_errors():
    result = MultiError([ValueError("x"), ValueError("y")])
    assert str(result).startswith("2 errors occurred:")