"""render schema instances into json compatible trees.

>>> normalize({1: BigInt(2 ** 70), "xs": (1, 2)})
{'1': '1180591620717411303424', 'xs': [1, 2]}
"""
import collections.abc

from . import exceptions, utils
from .fields import BigInt
from .schema import Schema
from .utils import EMPTY

__all__ = ("normalize", "to_json")


def to_json(instance):
    """the json compatible mapping of a schema instance.

    fields that were omitted without a default are left out, like undefined
    members of a json object. an explicit ``None`` is kept as ``null``.
    """
    data = {}
    for name, stored in instance._fields.items():
        value, field = stored.value, stored.field
        if value is EMPTY:
            continue
        if value is None:
            data[name] = None
            continue
        if field.nested:
            value = render(value)
        elif field.serdes is not None:
            value = field.serdes.encode(value)
        data[name] = normalize(value)
    return data


def render(value):
    if isinstance(value, Schema):
        return value.to_json()
    if utils.is_sequence(value):
        return [x.to_json() if isinstance(x, Schema) else x for x in value]
    return value


@utils.register
def normalize(value):
    """primitives and objects without a json form pass through unchanged"""
    return value


@normalize.register
def normalize_bigint(value: BigInt):
    return str(int(value))


@normalize.register(list)
@normalize.register(tuple)
@normalize.register(set)
@normalize.register(frozenset)
def normalize_array(value):
    return [normalize(x) for x in value]


@normalize.register
def normalize_mapping(value: collections.abc.Mapping):
    data = {}
    for key, item in value.items():
        k = utils.stringify_key(key)
        if k in data:
            raise exceptions.DuplicateKeyError(key)
        data[k] = normalize(item)
    return data


@normalize.register
def normalize_schema(value: Schema):
    return value.to_json()
