"""schema classes: declaration, hydration and validation.

a schema is a class whose ``Field`` attributes describe its data

>>> from typea import one, at_least
>>> class User(Schema):
...     name = one(str)
...     age = one(int, is_=at_least(18))
>>> User({"name": "ada", "age": 36}).validate()
[]
>>> User(name="bob", age=9).validate()
['age: 9 is not atLeast(18)']
>>> User().validate()
['name: is required', 'age: is required']
"""
import abc
import collections.abc
import logging
import types

from . import constraints, exceptions, nested, utils
from .fields import Field
from .utils import EMPTY, FIELDS

__all__ = ("Schema", "Schemata")

logger = logging.getLogger(__name__)

EXTRA = ("ignore", "forbid")


class Stored:
    """the per instance state of one field"""

    __slots__ = ("value", "validator", "field")

    def __init__(self, value, validator, field):
        self.value, self.validator, self.field = value, validator, field

    def __repr__(self):
        return f"Stored({self.value!r})"


def get_validator(field, value):
    """the field local validator for a freshly stored value"""
    if field.validators:
        return constraints.compose(field.validators)
    if field.nested:
        return None
    if field.literal is not EMPTY:
        return constraints.equals(field.literal)
    if field.choices:
        return constraints.one_of(field.choices)
    if field.type is not None:
        return constraints.type_check(field.type)
    if field.many:
        return by_kind
    return constraints.kind_check(value)


def by_kind(value):
    predicate = constraints.kind_check(value)
    if predicate is None:
        return True
    return predicate(value)


def bind(field, value):
    return Stored(value, get_validator(field, value), field)


def accessor(name, field):
    def get(self):
        value = self._fields[name].value
        return None if value is EMPTY else value

    def set(self, value):
        try:
            value = nested.resolve(value, field.target)
        except exceptions.DeserializationError as e:
            raise exceptions.DeserializationError(
                e.args[0], field=utils.join_path(name, e.field)
            ) from e
        self._fields[name] = bind(field, value)

    return property(get, set, doc=field.description)


class Schemata(abc.ABCMeta):
    """the metaclass collecting field descriptors into an accessor table"""

    def __new__(cls, name, bases, dict, extra=None, **kwargs):
        fields = {}
        for base in reversed(bases):
            fields.update(getattr(base, FIELDS, {}))

        own = {k: v for k, v in dict.items() if isinstance(v, Field)}
        for k, v in own.items():
            if k.startswith("_"):
                raise exceptions.ConfigurationError(
                    f"field names can't start with an underscore: {k}"
                )
            with utils.suppress(NameError):
                if hasattr(Schema, k):
                    raise exceptions.ConfigurationError(
                        f"the field {k} shadows a schema method"
                    )
            dict[k] = accessor(k, v)
        fields.update(own)

        if extra is None:
            extra = next((x.__extra__ for x in bases if hasattr(x, "__extra__")), "ignore")
        if extra not in EXTRA:
            raise exceptions.ConfigurationError(f"extra must be one of {EXTRA}, not {extra!r}")

        dict[FIELDS] = types.MappingProxyType(fields)
        dict["__extra__"] = extra
        return super().__new__(cls, name, bases, dict, **kwargs)

    def __repr__(cls):
        return f"<schema {cls.__module__}.{cls.__qualname__}>"


class Schema(metaclass=Schemata):
    """the base class of all schemas"""

    def __init__(self, raw=None, **kwargs):
        if raw is None:
            raw = {}
        if not isinstance(raw, collections.abc.Mapping):
            raise exceptions.DeserializationError(
                f"{type(self).__name__} expects a mapping, got {type(raw).__name__}"
            )
        if kwargs:
            raw = {**raw, **kwargs}

        schema = getattr(type(self), FIELDS)
        self._fields = {}
        for name, field in schema.items():
            self._fields[name] = bind(field, hydrate(name, field, raw.get(name, EMPTY)))

        self._extra = ()
        if self.__extra__ == "forbid":
            self._extra = tuple(k for k in raw if k not in schema)
        logger.debug("hydrated %s", type(self).__name__)

    @classmethod
    def from_fields(cls, fields, name=None, **kwargs):
        """build a schema class from a mapping of names to fields"""
        return type(cls)(name or cls.__name__, (cls,), dict(fields), **kwargs)

    @classmethod
    def try_new(cls, raw=None, **kwargs):
        """construct and validate, returning a ``Result`` instead of raising"""
        from . import result

        return result.try_new(cls, raw, **kwargs)

    @classmethod
    def schema(cls):
        """the json schema document of the declared fields"""
        from . import jsonschemas

        return jsonschemas.get_schema(cls)

    def validate(self):
        """the ordered list of ``"<path>: <message>"`` strings, empty when valid"""
        return [f"{path}: {message}" for _, path, message in self.iter_errors()]

    def iter_errors(self):
        """yield ``(field, path, message)`` for every validation failure"""
        for name, stored in self._fields.items():
            value, field = stored.value, stored.field

            if value is None or value is EMPTY:
                if field.required:
                    yield name, name, "is required"
                continue

            if field.many and not utils.is_sequence(value):
                yield name, name, "expected array"
                continue

            if isinstance(value, Schema):
                for _, path, message in value.iter_errors():
                    yield name, utils.join_path(name, path), message
            elif utils.is_sequence(value):
                for i, item in enumerate(value):
                    if isinstance(item, Schema):
                        for _, path, message in item.iter_errors():
                            yield name, utils.join_path(name, f"[{i}]", path), message

            if stored.validator is None:
                continue

            if utils.is_sequence(value) and (field.many or field.validators):
                for i, item in enumerate(value):
                    message = constraints.check(stored.validator, item)
                    if message is not True:
                        yield name, f"{name}[{i}]", message
            else:
                message = constraints.check(stored.validator, value)
                if message is not True:
                    yield name, name, message

        for key in self._extra:
            yield key, key, "unexpected field"

    def to_json(self):
        """the json compatible tree of this instance"""
        from . import serialize

        return serialize.to_json(self)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return all(
            self._fields[k].value == other._fields[k].value for k in self._fields
        )

    __hash__ = None

    def __repr__(self):
        values = ", ".join(f"{k}={v.value!r}" for k, v in self._fields.items())
        return f"{type(self).__name__}({values})"


def hydrate(name, field, supplied):
    """the stored value of one field from its raw input"""
    value = utils.get_default(field.default) if supplied is EMPTY else supplied
    if value is EMPTY:
        # omitted without a default, kept apart from an explicit None
        return EMPTY

    if field.serdes is not None and value is not None:
        try:
            value = field.serdes.decode(value)
        except exceptions.DeserializationError as e:
            raise exceptions.DeserializationError(
                e.args[0], field=utils.join_path(name, e.field)
            ) from e
        except Exception as e:
            raise exceptions.DeserializationError(
                str(e) or type(e).__name__, field=name
            ) from e

    try:
        return nested.resolve(value, field.target)
    except exceptions.DeserializationError as e:
        raise exceptions.DeserializationError(
            e.args[0], field=utils.join_path(name, e.field)
        ) from e
