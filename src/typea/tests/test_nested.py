import pytest

from typea import *
from typea import nested
from typea.fields import Array, Scalar, Variant


class Item(Schema):
    id = one(int)


class A(Schema):
    kind = one(literal("A"))
    a = one(str)
    b = one(int, optional=True)


class B(Schema):
    kind = one(literal("B"))
    b = one(int)


class Left(Schema):
    a = one(int)


class Right(Schema):
    b = one(int)


class Holder(Schema):
    item = one(Item, optional=True)
    items = many(Item, default=list)
    shape = one(variant(A, B), optional=True)
    shapes = many(variant(A, B), default=list)


def test_scalar():
    item = nested.resolve({"id": 1}, Scalar(Item))
    assert isinstance(item, Item) and item.id == 1


def test_scalar_keeps_instances():
    item = Item(id=1)
    assert nested.resolve(item, Scalar(Item)) is item
    assert Holder(item=item).item is item


def test_none_passes_through():
    assert nested.resolve(None, Scalar(Item)) is None
    assert nested.resolve(None, Array(Item)) is None
    assert nested.resolve("anything", None) == "anything"
    assert Holder().item is None


def test_array():
    items = nested.resolve([{"id": 1}, Item(id=2)], Array(Item))
    assert [type(x) for x in items] == [Item, Item]
    assert [x.id for x in items] == [1, 2]


def test_arrays_are_not_wrapped():
    with pytest.raises(DeserializationError) as e:
        nested.resolve({"id": 1}, Array(Item))
    assert "expected an array" in str(e.value)


def test_shape_mismatches():
    with pytest.raises(DeserializationError):
        nested.resolve("1", Scalar(Item))
    with pytest.raises(DeserializationError) as e:
        nested.resolve([{"id": 1}, 2], Array(Item))
    assert e.value.field == "[1]"
    with pytest.raises(DeserializationError) as e:
        Holder(items=[{"id": 1}, 2])
    assert e.value.field == "items[1]"
    with pytest.raises(DeserializationError):
        nested.resolve(1, Variant((A, B)))


def test_discriminator_beats_overlap():
    # A declares b too, the kind tag still wins
    shape = Holder(shape={"kind": "B", "b": 123}).shape
    assert type(shape) is B
    assert shape.b == 123
    assert type(Holder(shape={"kind": "A", "a": "x"}).shape) is A


def test_overlap():
    target = variant(Left, Right)
    assert nested.pick({"b": 5}, target) is Right
    assert nested.pick({"a": 5}, target) is Left


def test_ties_go_to_the_first_candidate():
    assert nested.pick({"a": 1, "b": 2}, variant(Left, Right)) is Left
    assert nested.pick({"a": 1, "b": 2}, variant(Right, Left)) is Right
    assert nested.pick({}, variant(Right, Left)) is Right
    assert nested.pick({"c": 1}, variant(Left, Right)) is Left


def test_unmatched_tags_fall_back_to_overlap():
    assert nested.pick({"kind": "C", "b": 1}, variant(Left, Right)) is Right
    assert nested.pick({"kind": "C", "a": "x"}, variant(A, B)) is A


def test_instances_keep_their_schema():
    b = B(b=1)
    assert nested.pick(b, variant(A, B)) is B
    assert Holder(shape=b).shape is b


def test_custom_discriminator():
    class Cat(Schema):
        type = one(literal("cat"))
        lives = one(int, default=9)

    class Dog(Schema):
        type = one(literal("dog"))

    target = variant(Cat, Dog, key="type")
    assert nested.pick({"type": "dog", "lives": 1}, target) is Dog
    assert nested.resolve({"type": "cat"}, target).lives == 9


def test_many_variants():
    shapes = Holder(shapes=[{"kind": "A", "a": "x"}, {"b": 1, "kind": "B"}]).shapes
    assert [type(x) for x in shapes] == [A, B]
