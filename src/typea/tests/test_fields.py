import enum

import pytest

from typea import *
from typea.fields import Array, Scalar, Variant


class Leaf(Schema):
    name = one(str)


class Status(enum.Enum):
    OK = "ok"
    ERROR = "error"


def test_one_and_many():
    field = one(str, default="anon", description="a name")
    assert field.type is str
    assert field.default == "anon"
    assert not field.required
    assert not field.many

    field = many(int)
    assert field.many and field.type is int
    assert field.required


def test_nested_targets():
    assert one(Leaf).target == Scalar(Leaf)
    assert many(Leaf).target == Array(Scalar(Leaf))
    assert one(variant(Leaf)).target == Variant((Leaf,))
    assert many(variant(Leaf)).target == Array(Variant((Leaf,)))
    assert one(Leaf).nested and not one(str).nested


def test_literal_and_enum():
    field = one(literal("cat"))
    assert field.literal == field.default == "cat"
    assert not field.required

    assert one(Status).choices == ("ok", "error")
    assert one(["a", "b"]).choices == ("a", "b")


def test_fields_are_immutable():
    field = one(str)
    with pytest.raises(AttributeError):
        field.default = "x"
    with pytest.raises(AttributeError):
        Scalar(Leaf).schema = Leaf
    with pytest.raises(AttributeError):
        bigint.encode = repr


def test_replace():
    field = one(int, is_=positive)
    other = field.replace(optional=True)
    assert other.optional and not field.optional
    assert other.validators == (positive,)


def test_serdes_pairs_become_codecs():
    field = one(serdes=(str, int))
    assert isinstance(field.serdes, Codec)
    assert field.serdes.encode(1) == "1"
    assert field.serdes.decode("1") == 1
    assert tuple(field.serdes) == (str, int)


def test_codec_inverse():
    assert bigint.inverse().encode("12") == BigInt(12)
    assert bigint.inverse().inverse() == bigint


def test_bigint_text():
    assert str(BigInt(42)) == "42"
    assert f"{BigInt(-7)}" == "-7"
    assert repr(BigInt(3)) == "BigInt(3)"


@pytest.mark.parametrize(
    "args, kwargs",
    [
        ((), {}),
        ((int,), {}),
        (("Leaf",), {}),
        ((Leaf,), dict(key="")),
        ((Leaf,), dict(key=1)),
    ],
)
def test_variant_configuration(args, kwargs):
    with pytest.raises(ConfigurationError):
        variant(*args, **kwargs)


def test_field_configuration():
    with pytest.raises(ConfigurationError):
        one(is_=["not callable"])
    with pytest.raises(ConfigurationError):
        one(serdes=str)
    with pytest.raises(ConfigurationError):
        one(object())
    with pytest.raises(ConfigurationError):
        one([])
    with pytest.raises(ConfigurationError):
        Field(target="Leaf")
    with pytest.raises(ConfigurationError):
        many(Array(Leaf))


def test_schema_configuration():
    with pytest.raises(ConfigurationError):

        class Private(Schema):
            _hidden = one(str)

    with pytest.raises(ConfigurationError):

        class Shadow(Schema):
            validate = one(str)

    with pytest.raises(ConfigurationError):

        class Loose(Schema, extra="allow"):
            name = one(str)


def test_fields_are_collected_in_order():
    class Base(Schema):
        b = one(int)
        a = one(int)

    class Child(Base):
        c = one(int)

    assert list(Base.__fields__) == ["b", "a"]
    assert list(Child.__fields__) == ["b", "a", "c"]
    with pytest.raises(TypeError):
        Child.__fields__["d"] = one(int)


def test_from_fields():
    Point = Schema.from_fields(dict(x=one(int), y=one(int)), name="Point")
    assert Point.__name__ == "Point"
    assert list(Point.__fields__) == ["x", "y"]
    assert Point(x=1, y=2).to_json() == dict(x=1, y=2)
