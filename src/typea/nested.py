"""resolve raw values into child schema instances.

the nested target of a field decides how a raw value becomes an instance: a
``Scalar`` hydrates one mapping, an ``Array`` hydrates each item and a
``Variant`` first picks which candidate schema the raw value belongs to.
"""
import collections.abc
import logging

from . import exceptions, utils
from .fields import Array, Scalar, Variant
from .utils import EMPTY, FIELDS

__all__ = ("pick", "resolve")

logger = logging.getLogger(__name__)


def resolve(value, target):
    """convert ``value`` for a nested ``target``, ``None`` passes through unchanged"""
    if value is None or target is None:
        return value
    return resolve_target(target, value)


@utils.register
def resolve_target(target, value):
    raise exceptions.ConfigurationError(f"{target!r} is not a nested target")


@resolve_target.register
def resolve_scalar(target: Scalar, value):
    return instantiate(target.schema, value)


@resolve_target.register
def resolve_array(target: Array, value):
    if not utils.is_sequence(value):
        raise exceptions.DeserializationError(
            f"expected an array, got {type(value).__name__}"
        )
    result = []
    for i, item in enumerate(value):
        try:
            result.append(resolve_target(target.item, item))
        except exceptions.DeserializationError as e:
            raise exceptions.DeserializationError(
                e.args[0], field=utils.join_path(f"[{i}]", e.field)
            ) from e
    return result


@resolve_target.register
def resolve_variant(target: Variant, value):
    return instantiate(pick(value, target), value)


def instantiate(schema, value):
    if isinstance(value, schema):
        return value
    if isinstance(value, collections.abc.Mapping):
        logger.debug("hydrating %s from %s keys", schema.__name__, len(value))
        return schema(value)
    raise exceptions.DeserializationError(
        f"expected {schema.__name__} or a mapping, got {type(value).__name__}"
    )


def get_tag(schema, key):
    """the literal a schema declares for the discriminator ``key``"""
    field = getattr(schema, FIELDS).get(key)
    if field is None:
        return EMPTY
    if field.literal is not EMPTY:
        return field.literal
    if field.default is not EMPTY and not callable(field.default):
        return field.default
    return EMPTY


def pick(value, target):
    """choose the candidate schema of a variant for a raw value.

    1. an instance of a candidate keeps its own schema.
    2. a discriminator property selects the candidate declaring it as a literal.
    3. otherwise the candidate sharing the most field names wins, ties and
       no overlap at all go to the first candidate.
    """
    for schema in target.schemas:
        if isinstance(value, schema):
            return schema

    if not isinstance(value, collections.abc.Mapping):
        raise exceptions.DeserializationError(
            f"expected one of {[x.__name__ for x in target.schemas]} or a mapping,"
            f" got {type(value).__name__}"
        )

    if target.key in value:
        tag = value[target.key]
        for schema in target.schemas:
            declared = get_tag(schema, target.key)
            if declared is not EMPTY and declared == tag:
                logger.debug("%s=%r picked %s", target.key, tag, schema.__name__)
                return schema
        logger.debug("%s=%r matched no candidate", target.key, tag)

    keys = set(value)
    best, score = target.schemas[0], 0
    for schema in target.schemas:
        overlap = len(keys.intersection(getattr(schema, FIELDS)))
        if overlap > score:
            best, score = schema, overlap
    logger.debug("field overlap of %s picked %s", score, best.__name__)
    return best
