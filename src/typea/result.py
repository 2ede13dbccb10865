"""non throwing construction: results and per field error logs"""
import re

import jsonpointer

from . import exceptions

__all__ = ("ErrLog", "Result", "try_new")

PARTS = re.compile(r"[^.\[\]]+")


class ErrLog(dict):
    """the first error message of each failing field.

    ``summarize`` returns every collected message in order."""

    def __init__(self, errors=()):
        super().__init__()
        self._errors = []
        for field, path, message in errors:
            self._errors.append((path, message))
            relative = path[len(field) :].lstrip(".") if path.startswith(field) else path
            self.setdefault(field, f"{relative}: {message}" if relative else message)

    def summarize(self):
        return [f"{path}: {message}" if path else message for path, message in self._errors]

    def pointers(self):
        """``(json pointer, message)`` pairs locating each failure in the raw input"""
        return [
            (jsonpointer.JsonPointer.from_parts(PARTS.findall(path)).path or "/", message)
            for path, message in self._errors
        ]

    def report(self):
        pointers = self.pointers()
        shift = max((len(x) for x, _ in pointers), default=0)
        return "\n".join(
            "❗ @" + x + " " * (shift - len(x)) + ": " + str(y) for x, y in pointers
        )

    def __rich__(self):
        import rich.table

        table = rich.table.Table("field", "message", title=type(self).__name__)
        for path, message in self._errors:
            table.add_row(path, message)
        return table

    def print(self):
        import rich

        return rich.print(self)

    def __repr__(self):
        return f"{type(self).__name__}({dict.__repr__(self)})"


class Result:
    """either a valid instance ``val`` or an error log ``errs``, never both"""

    __slots__ = ("val", "errs")

    def __init__(self, val=None, errs=None):
        self.val, self.errs = val, errs

    @property
    def ok(self):
        return self.errs is None

    def __bool__(self):
        return self.ok

    def __iter__(self):
        yield self.val
        yield self.errs

    def __repr__(self):
        if self.ok:
            return f"Result(val={self.val!r})"
        return f"Result(errs={self.errs!r})"


def try_new(cls, raw=None, **kwargs):
    """hydrate and validate ``raw`` as ``cls`` without raising.

    deserialization failures are reported as the message of the failing field.
    input that is not a mapping is reported under the name of the schema.
    """
    try:
        instance = cls(raw, **kwargs)
    except exceptions.DeserializationError as e:
        if not e.field:
            return Result(errs=ErrLog([(cls.__name__, "", e.args[0])]))
        field = PARTS.findall(e.field)[0]
        return Result(errs=ErrLog([(field, e.field, e.args[0])]))

    errors = list(instance.iter_errors())
    if errors:
        return Result(errs=ErrLog(errors))
    return Result(val=instance)
