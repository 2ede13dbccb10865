"""predicates and the validator composer.

a predicate takes one value and returns ``True`` or an error message. it may also
raise an ``AssertionError``, which counts as a failure carrying the exception text.

>>> check = compose([at_least(10), is_integer])
>>> check(12)
True
>>> check(8)
'8 is not atLeast(10)'
>>> check(10.5)
'10.5 is not an integer'
"""
import enum
import re

from . import exceptions, utils
from .fields import BigInt

__all__ = (
    "a_uuid",
    "at_least",
    "at_most",
    "between",
    "compose",
    "equals",
    "greater_than",
    "is_integer",
    "is_required",
    "less_than",
    "negative",
    "no_more_than",
    "non_empty",
    "one_of",
    "positive",
)


def check(predicate, value):
    """run one predicate, folding assertion failures into messages"""
    try:
        result = predicate(value)
    except AssertionError as e:
        return str(e) or f"{value!r} failed {getattr(predicate, '__name__', predicate)}"
    except (TypeError, ValueError):
        # the value has the wrong shape for the predicate
        return f"{value!r} failed {getattr(predicate, '__name__', 'validation')}"
    if result is True:
        return True
    if result is False or result is None:
        return f"{value!r} failed {getattr(predicate, '__name__', 'validation')}"
    return str(result)


def compose(predicates):
    """combine predicates into one that returns the first failure"""
    predicates = utils.enforce_tuple(predicates)
    if not predicates:
        return None
    if len(predicates) == 1:
        (predicate,) = predicates
        return lambda value: check(predicate, value)

    def composed(value):
        for predicate in predicates:
            result = check(predicate, value)
            if result is not True:
                return result
        return True

    return composed


# built-in shape checks keyed by the runtime kind of a value


def is_boolean(value):
    return isinstance(value, bool) or "expected boolean"


def is_number(value):
    return utils.is_finite(value) or "expected finite number"


def is_string(value):
    return isinstance(value, str) or "expected string"


def is_array(value):
    return utils.is_sequence(value) or "expected array"


def is_object(value):
    return isinstance(value, dict) or "expected plain object"


@utils.register
def kind_check(value):
    """the built-in check for the runtime kind of ``value``, if there is one"""
    return None


@kind_check.register
def kind_check_bool(value: bool):
    return is_boolean


@kind_check.register(int)
@kind_check.register(float)
def kind_check_number(value):
    return is_number


@kind_check.register
def kind_check_str(value: str):
    return is_string


@kind_check.register(list)
@kind_check.register(tuple)
def kind_check_list(value):
    return is_array


@kind_check.register
def kind_check_dict(value: dict):
    return is_object


def is_bigint(value):
    return (isinstance(value, int) and not isinstance(value, bool)) or "expected bigint"


@kind_check.register
def kind_check_bigint(value: BigInt):
    return is_bigint


def is_int(value):
    return (
        isinstance(value, int) and not isinstance(value, bool)
    ) or "expected integer"


TYPE_CHECKS = {
    bool: is_boolean,
    int: is_int,
    float: is_number,
    str: is_string,
    list: is_array,
    tuple: is_array,
    dict: is_object,
    BigInt: is_bigint,
}


def type_check(cls):
    """the built-in check for a declared python type"""
    if cls in TYPE_CHECKS:
        return TYPE_CHECKS[cls]

    def is_instance(value):
        return isinstance(value, cls) or f"expected {cls.__name__}"

    return is_instance


# ready made predicates


def at_least(min):
    """value >= min"""

    def at_least(value):
        return value >= min or f"{value} is not atLeast({min})"

    return at_least


def at_most(max):
    """value <= max"""

    def at_most(value):
        return value <= max or f"{value} is not atMost({max})"

    return at_most


no_more_than = at_most


def greater_than(min):
    def greater_than(value):
        return value > min or f"{value} is not greaterThan({min})"

    return greater_than


def less_than(max):
    def less_than(value):
        return value < max or f"{value} is not lessThan({max})"

    return less_than


def between(min, max, inclusive=True):
    """an inclusive (or strict) range check

    >>> between(1, 3)(3), between(1, 3, inclusive=False)(3)
    (True, '3 is not strictly between(1, 3)')
    """

    def between(value):
        ok = min <= value <= max if inclusive else min < value < max
        return ok or f"{value} is not{'' if inclusive else ' strictly'} between({min}, {max})"

    return between


def positive(value):
    return value > 0 or f"{value} is not positive"


def negative(value):
    return value < 0 or f"{value} is not negative"


def is_integer(value):
    if isinstance(value, float):
        return value.is_integer() or f"{value} is not an integer"
    return isinstance(value, int) or f"{value} is not an integer"


def non_empty(value):
    return len(value) > 0 or "must not be empty"


UUID4 = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$", re.I
)


@utils.validates(str)
def a_uuid(value):
    return bool(UUID4.match(value)) or "Invalid UUID"


def is_required(value):
    return value is not None or "is required"


def equals(expected):
    def equals(value):
        exceptions.assertEqual(value, expected, f"{value!r} is not {expected!r}")
        return True

    return equals


def one_of(values):
    """the value is one of ``values``, an iterable or an enum class"""
    if isinstance(values, type) and issubclass(values, enum.Enum):
        values = tuple(x.value for x in values)
    values = tuple(values)

    def one_of(value):
        if isinstance(value, enum.Enum):
            value = value.value
        return value in values or f"{value!r} is not one of {list(values)!r}"

    return one_of
