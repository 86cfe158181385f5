"""
Plain assertions for use inside polling checks.

Each function raises AssertionError with an Expected/Actual message on
failure and returns quietly otherwise, so it can be wrapped in a lambda and
handed to wait_assert().
"""

from typing import Any, Callable, Iterable, List


def _fail(title: str, expected: Any, actual: Any) -> AssertionError:
    return AssertionError(
        f"{title}\n"
        f"Expected: {expected!r}\n"
        f"Actual:   {actual!r}"
    )


def equal(expected: Any, actual: Any) -> None:
    if expected != actual:
        raise _fail("Assert.Equal() Failure", expected, actual)


def true(actual: Any) -> None:
    if not actual:
        raise _fail("Assert.True() Failure", True, actual)


def false(actual: Any) -> None:
    if actual:
        raise _fail("Assert.False() Failure", False, actual)


def contains(expected_substring: str, actual_string: str) -> None:
    if actual_string is None or expected_substring not in actual_string:
        raise AssertionError(
            "Assert.Contains() Failure\n"
            f"Not found: {expected_substring!r}\n"
            f"In value:  {actual_string!r}"
        )


def empty(actual_values: Iterable) -> None:
    items = list(actual_values)
    if items:
        raise AssertionError(
            "Assert.Empty() Failure\n"
            f"Collection: {items!r}"
        )


def not_empty(actual_values: Iterable) -> None:
    if not list(actual_values):
        raise AssertionError("Assert.NotEmpty() Failure\nCollection was empty")


def single(actual_values: Iterable) -> Any:
    """Assert exactly one item and return it."""
    items = list(actual_values)
    if len(items) != 1:
        raise AssertionError(
            "Assert.Single() Failure\n"
            f"The collection contained {len(items)} items instead of 1: {items!r}"
        )
    return items[0]


def collection(actual_values: Iterable, *inspectors: Callable[[Any], Any]) -> None:
    """
    Assert one inspector per item, in order.

    Inspectors are callables that raise when the item at their position is
    wrong, usually another check from this module.
    """
    items: List[Any] = list(actual_values)
    if len(items) != len(inspectors):
        raise AssertionError(
            "Assert.Collection() Failure\n"
            f"Expected item count: {len(inspectors)}\n"
            f"Actual item count:   {len(items)}"
        )
    for index, (item, inspector) in enumerate(zip(items, inspectors)):
        try:
            inspector(item)
        except Exception as e:
            raise AssertionError(
                "Assert.Collection() Failure\n"
                f"Error during comparison of item at index {index}\n"
                f"Item: {item!r}\n"
                f"Inner exception: {e}"
            ) from e
