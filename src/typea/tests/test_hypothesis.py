import hypothesis
from hypothesis import strategies as st

from typea import *
from typea.serialize import normalize


class Point(Schema):
    x = one(int)
    y = one(float)
    label = one(str)
    on = one(bool)
    tags = many(str)


class Bounded(Schema):
    n = one(int, is_=[at_least(0), at_most(100)])


points = st.fixed_dictionaries(
    dict(
        x=st.integers(),
        y=st.floats(allow_nan=False, allow_infinity=False),
        label=st.text(),
        on=st.booleans(),
        tags=st.lists(st.text()),
    )
)


@hypothesis.given(points)
def test_points_round_trip(raw):
    point = Point(raw)
    assert point.validate() == []
    assert point.to_json() == raw
    assert Point(point.to_json()) == point


@hypothesis.given(st.integers())
def test_try_new_agrees_with_validate(n):
    result = Bounded.try_new(n=n)
    assert (result.errs is None) == (Bounded(n=n).validate() == [])
    assert result.ok == (0 <= n <= 100)


@hypothesis.given(st.integers())
def test_bigints_are_decimal_strings(n):
    assert normalize(BigInt(n)) == str(n)
    assert int(normalize(BigInt(n))) == n


@hypothesis.given(st.dictionaries(st.integers(), st.integers()))
def test_integer_keys_never_collide(data):
    assert normalize(data) == {str(k): v for k, v in data.items()}
