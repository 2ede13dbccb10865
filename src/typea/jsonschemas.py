"""project schema declarations into draft-07 json schema documents.

only the descriptor surface is read: declared types, defaults, literals, choices,
nested targets and whether a field is required. predicate logic is not projected.
"""
import inspect

import jsonschema

from . import utils
from .fields import Array, BigInt, Scalar, Variant
from .utils import EMPTY, FIELDS

__all__ = ("check", "get_schema")

DRAFT7 = "http://json-schema.org/draft-07/schema#"

TYPE_NAMES = {
    bool: dict(type="boolean"),
    int: dict(type="integer"),
    float: dict(type="number"),
    str: dict(type="string"),
    list: dict(type="array"),
    tuple: dict(type="array"),
    dict: dict(type="object"),
    BigInt: dict(type="string", pattern=r"^-?[0-9]+$"),
}


def get_schema(cls):
    """the json schema document of a schema class"""
    return {"$schema": DRAFT7, **get_object(cls)}


def get_object(cls):
    schema = dict(type="object", title=cls.__name__)
    doc = vars(cls).get("__doc__")
    if doc:
        schema["description"] = inspect.cleandoc(doc)

    fields = getattr(cls, FIELDS)
    schema["properties"] = {k: get_field(v) for k, v in fields.items()}
    required = [k for k, v in fields.items() if v.required]
    if required:
        schema["required"] = required
    if cls.__extra__ == "forbid":
        schema["additionalProperties"] = False
    return schema


def get_field(field):
    if field.target is not None:
        schema = get_target(field.target)
    else:
        schema = get_value(field)
        if field.many:
            schema = dict(type="array", items=schema)
    if field.optional:
        schema = get_nullable(schema)

    if field.default is not EMPTY and not callable(field.default):
        from .serialize import normalize

        schema["default"] = normalize(field.default)
    if field.title:
        schema["title"] = field.title
    if field.description:
        schema["description"] = field.description
    return schema


def get_nullable(schema):
    """optional fields serialize an explicit ``None`` as ``null``"""
    if not schema:
        return schema
    if "anyOf" in schema:
        return dict(schema, anyOf=schema["anyOf"] + [dict(type="null")])
    if isinstance(schema.get("type"), str) and not {"const", "enum"} & set(schema):
        return dict(schema, type=[schema["type"], "null"])
    return dict(anyOf=[schema, dict(type="null")])


def get_value(field):
    if field.literal is not EMPTY:
        return dict(const=field.literal)
    if field.choices:
        return dict(enum=list(field.choices))
    if field.serdes is not None:
        # the raw form is whatever the codec encodes to
        return {}
    return dict(TYPE_NAMES.get(field.type, {}))


@utils.register
def get_target(target):
    return {}


@get_target.register
def get_target_scalar(target: Scalar):
    return get_object(target.schema)


@get_target.register
def get_target_variant(target: Variant):
    return dict(anyOf=[get_object(x) for x in target.schemas])


@get_target.register
def get_target_array(target: Array):
    return dict(type="array", items=get_target(target.item))


def check(cls, data):
    """the json schema errors of raw ``data`` against a schema class"""
    validator = jsonschema.Draft7Validator(cls.schema())
    return [
        f"{'/'.join(map(str, error.absolute_path)) or '/'}: {error.message}"
        for error in validator.iter_errors(data)
    ]
