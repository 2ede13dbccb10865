import abc
import copy
import functools
import math
from contextlib import suppress
from functools import singledispatch as register
from unittest import TestCase

testing = TestCase()
testing.longMessage = False

FIELDS = "__fields__"


class Ø(abc.ABCMeta):
    def __bool__(self):
        return False

    def __repr__(self):
        return self.__name__


class EMPTY(metaclass=Ø):
    """a false sentinel for values the caller did not supply"""

    pass


def validates(*types):
    """a decorator for predicates that only operate on specific types

    >>> @validates(str)
    ... def loud(value):
    ...     return value.isupper() or "not loud"
    >>> loud("ABC"), loud(1)
    (True, True)
    """

    def decorator(callable):
        @functools.wraps(callable)
        def main(object):
            if isinstance(object, types):
                return callable(object)
            return True

        return main

    return decorator


def enforce_tuple(x):
    """make sure the input is a tuple"""
    with suppress(TypeError):
        if x in {None, EMPTY}:
            return ()
    if isinstance(x, list):
        return tuple(x)
    if not isinstance(x, tuple):
        return (x,)
    return x


def get_default(object, default=EMPTY):
    """resolve a field default, calling it when it is callable.

    plain defaults are copied so instances never share them.
    """
    if object is EMPTY:
        return default
    if callable(object):
        return object()
    return copy.deepcopy(object)


def is_sequence(x):
    return isinstance(x, (list, tuple))


def is_finite(x):
    """ints of any size are finite, floats are checked

    >>> is_finite(10 ** 400), is_finite(float("inf")), is_finite(True)
    (True, False, False)
    """
    if isinstance(x, bool):
        return False
    if isinstance(x, int):
        return True
    return isinstance(x, float) and math.isfinite(x)


@register
def stringify_key(x):
    """coerce a mapping key the way a json object would see it"""
    return str(x)


@stringify_key.register
def stringify_key_str(x: str):
    return x


@stringify_key.register
def stringify_key_bool(x: bool):
    return "true" if x else "false"


@stringify_key.register
def stringify_key_float(x: float):
    if x.is_integer():
        return str(int(x))
    return repr(x)


@stringify_key.register(type(None))
def stringify_key_none(x):
    return "null"


def join_path(*parts):
    """join field names and ``[index]`` parts into a single path

    >>> join_path("items", "[0]", "name")
    'items[0].name'
    """
    path = ""
    for part in parts:
        if not part:
            continue
        if not path or part.startswith("["):
            path += part
        else:
            path += "." + part
    return path
