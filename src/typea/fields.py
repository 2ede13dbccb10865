"""field descriptors: the static metadata a schema declares for each field.

a field is built with ``one`` or ``many``

>>> one(str, default="anon").default
'anon'
>>> many(int).many
True
>>> one(literal("cat")).literal
'cat'
"""
import collections.abc
import datetime
import enum

from . import exceptions, utils
from .utils import EMPTY, FIELDS

__all__ = (
    "Array",
    "BigInt",
    "Codec",
    "Field",
    "Literal",
    "Scalar",
    "Variant",
    "bigint",
    "isodatetime",
    "literal",
    "many",
    "one",
    "variant",
)


class BigInt(int):
    """an arbitrary precision integer that serializes as a decimal string"""

    __str__ = int.__repr__

    def __repr__(self):
        return f"{type(self).__name__}({int(self)})"


class Codec:
    """an encode/decode pair converting between in-memory and raw values

    >>> codec = Codec(str, int)
    >>> codec.encode(1), codec.decode("1")
    ('1', 1)
    >>> codec.inverse().encode("1")
    1
    """

    __slots__ = ("encode", "decode")

    def __init__(self, encode, decode):
        if not (callable(encode) and callable(decode)):
            raise exceptions.ConfigurationError("a codec needs callable encode and decode")
        object.__setattr__(self, "encode", encode)
        object.__setattr__(self, "decode", decode)

    def __setattr__(self, key, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __iter__(self):
        yield self.encode
        yield self.decode

    def __eq__(self, other):
        if isinstance(other, Codec):
            return tuple(self) == tuple(other)
        return NotImplemented

    def __hash__(self):
        return hash(tuple(self))

    def inverse(self):
        return Codec(self.decode, self.encode)

    def __repr__(self):
        return f"Codec({self.encode!r}, {self.decode!r})"


bigint = Codec(str, BigInt)

isodatetime = Codec(datetime.datetime.isoformat, datetime.datetime.fromisoformat)


class Target:
    """the nested classification of a field"""

    __slots__ = ()

    def __setattr__(self, key, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def candidates(self):
        return ()


class Scalar(Target):
    """the field holds a single child schema instance"""

    __slots__ = ("schema",)

    def __init__(self, schema):
        object.__setattr__(self, "schema", check_schema(schema))

    @property
    def candidates(self):
        return (self.schema,)

    def __eq__(self, other):
        return type(other) is type(self) and other.schema is self.schema

    def __hash__(self):
        return hash((type(self), self.schema))

    def __repr__(self):
        return f"Scalar({self.schema.__name__})"


class Variant(Target):
    """the field holds one of several candidate schemas picked by a discriminator"""

    __slots__ = ("schemas", "key")

    def __init__(self, schemas, key="kind"):
        schemas = utils.enforce_tuple(schemas)
        if not schemas:
            raise exceptions.ConfigurationError("a variant needs at least one candidate schema")
        if not isinstance(key, str) or not key:
            raise exceptions.ConfigurationError(
                f"a variant discriminator must be a non-empty string, not {key!r}"
            )
        object.__setattr__(self, "schemas", tuple(map(check_schema, schemas)))
        object.__setattr__(self, "key", key)

    @property
    def candidates(self):
        return self.schemas

    def __eq__(self, other):
        return (
            type(other) is type(self)
            and other.schemas == self.schemas
            and other.key == self.key
        )

    def __hash__(self):
        return hash((type(self), self.schemas, self.key))

    def __repr__(self):
        names = ", ".join(x.__name__ for x in self.schemas)
        return f"Variant([{names}], key={self.key!r})"


class Array(Target):
    """the field holds a list whose items follow a scalar or variant target"""

    __slots__ = ("item",)

    def __init__(self, item):
        if isinstance(item, Array):
            raise exceptions.ConfigurationError("arrays of arrays are not supported")
        if not isinstance(item, Target):
            item = Scalar(item)
        object.__setattr__(self, "item", item)

    @property
    def schema(self):
        return getattr(self.item, "schema", None)

    @property
    def candidates(self):
        return self.item.candidates

    def __eq__(self, other):
        return type(other) is type(self) and other.item == self.item

    def __hash__(self):
        return hash((type(self), self.item))

    def __repr__(self):
        return f"Array({self.item!r})"


def check_schema(schema):
    """a nested target needs a schema class with a discernible field map"""
    if not isinstance(schema, type) or not isinstance(
        getattr(schema, FIELDS, None), collections.abc.Mapping
    ):
        raise exceptions.ConfigurationError(
            f"{schema!r} is not a schema class with declared fields"
        )
    return schema


def variant(*schemas, key="kind"):
    """a discriminated union of schema classes.

    the raw value's ``key`` property picks the candidate declaring that key as a
    literal, otherwise the candidate sharing the most field names wins."""
    if len(schemas) == 1 and isinstance(schemas[0], (list, tuple)):
        schemas = tuple(schemas[0])
    return Variant(schemas, key=key)


class Literal:
    __slots__ = ("value",)

    def __init__(self, value):
        object.__setattr__(self, "value", value)

    def __setattr__(self, key, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self):
        return f"Literal({self.value!r})"


def literal(value):
    """a field that always holds ``value``, used for discriminator tags"""
    return Literal(value)


class Field:
    """the immutable descriptor of one schema field.

    Parameters
    ----------
    default
        a value or a zero argument callable used when the raw input omits the field
    is_
        a predicate or ordered list of predicates returning ``True`` or a message
    serdes
        a ``Codec`` or an ``(encode, decode)`` pair
    target
        the nested target, ``None`` for plain values
    type
        the declared python type for the built-in shape check
    literal
        a constant the field must hold
    choices
        the allowed values of an enum valued field
    optional
        whether ``None`` is a valid value
    many
        whether the field holds a list
    """

    __slots__ = (
        "default",
        "validators",
        "serdes",
        "target",
        "type",
        "literal",
        "choices",
        "optional",
        "many",
        "description",
        "title",
    )

    def __init__(
        self,
        default=EMPTY,
        is_=(),
        serdes=None,
        target=None,
        type=None,
        literal=EMPTY,
        choices=(),
        optional=False,
        many=False,
        description=None,
        title=None,
    ):
        validators = utils.enforce_tuple(is_)
        for predicate in validators:
            if not callable(predicate):
                raise exceptions.ConfigurationError(f"{predicate!r} is not a predicate")

        if serdes is not None and not isinstance(serdes, Codec):
            try:
                serdes = Codec(*serdes)
            except TypeError:
                raise exceptions.ConfigurationError(
                    f"serdes must be a Codec or an (encode, decode) pair, not {serdes!r}"
                ) from None

        if target is not None and not isinstance(target, Target):
            raise exceptions.ConfigurationError(f"{target!r} is not a nested target")

        if many and target is not None and not isinstance(target, Array):
            target = Array(target)

        if literal is not EMPTY and default is EMPTY:
            default = literal

        for k, v in dict(
            default=default,
            validators=validators,
            serdes=serdes,
            target=target,
            type=type,
            literal=literal,
            choices=tuple(choices),
            optional=bool(optional),
            many=bool(many),
            description=description,
            title=title,
        ).items():
            object.__setattr__(self, k, v)

    def __setattr__(self, key, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def required(self):
        return not self.optional and self.default is EMPTY

    @property
    def nested(self):
        return self.target is not None

    def replace(self, **kwargs):
        """a copy of the field with some options replaced"""
        options = {k: getattr(self, k) for k in self.__slots__}
        options["is_"] = options.pop("validators")
        options.update(kwargs)
        return Field(**options)

    def __repr__(self):
        options = ", ".join(
            f"{k}={getattr(self, k)!r}"
            for k in self.__slots__
            if not any(getattr(self, k) is x for x in (EMPTY, None, False))
            and getattr(self, k) != ()
        )
        return f"Field({options})"


@utils.register
def build_field(spec):
    raise exceptions.ConfigurationError(f"can't build a field from {spec!r}")


@build_field.register(type(None))
def build_field_none(spec):
    return {}


@build_field.register
def build_field_type(spec: type):
    from .schema import Schemata

    if isinstance(spec, Schemata):
        return dict(target=Scalar(spec))
    if issubclass(spec, enum.Enum):
        return dict(choices=tuple(x.value for x in spec))
    return dict(type=spec)


@build_field.register
def build_field_target(spec: Target):
    return dict(target=spec)


@build_field.register
def build_field_literal(spec: Literal):
    return dict(literal=spec.value)


@build_field.register(list)
@build_field.register(tuple)
@build_field.register(set)
@build_field.register(frozenset)
def build_field_choices(spec):
    if not spec:
        raise exceptions.ConfigurationError("an enum field needs at least one choice")
    return dict(choices=tuple(spec))


def one(spec=None, **options):
    """declare a field holding a single value"""
    return Field(**{**build_field(spec), **options})


def many(spec=None, **options):
    """declare a field holding a list of values"""
    schema = build_field(spec)
    if "target" in schema:
        schema["target"] = Array(schema["target"])
    return Field(**{**schema, **options}, many=True)
