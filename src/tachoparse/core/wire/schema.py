"""Payload shapes and the decoder that acts on them.

Record layouts are plain data built from four shapes:

  Prim     fixed-width (or rest-of-payload) value with a primitive decoder
  Blob     raw bytes, fixed width or rest of payload
  Struct   named fields in wire order
  Records  repeated sub-records, count-prefixed or filling the payload

PayloadDecoder is the only place that interprets them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from tachoparse.core.base.errors import MalformedError, TruncatedError
from tachoparse.core.base.types import Diagnostic, DiagnosticKind, Malformed
from tachoparse.core.wire.cursor import Cursor

lg = logging.getLogger(__name__)


@dataclass(frozen=True)
class Prim:
    width: int | None
    decode: Callable[[bytes], object]


@dataclass(frozen=True)
class Blob:
    width: int | None = None


@dataclass(frozen=True)
class Struct:
    fields: tuple[tuple[str, Shape], ...]

    @property
    def width(self) -> int | None:
        total = 0
        for _, shape in self.fields:
            if shape.width is None:
                return None
            total += shape.width
        return total

    def extend(self, *fields: tuple[str, Shape]) -> Struct:
        return Struct(self.fields + fields)


@dataclass(frozen=True)
class Records:
    """Repeated records.

    With ``count_width`` set, an unsigned count of that many bytes precedes
    the records. With ``count`` set, exactly that many records follow.
    Otherwise the records fill the rest of the payload. ``skip_empty``
    drops fixed-width records that are all zero bytes.
    """

    item: Shape
    count_width: int = 0
    skip_empty: bool = False
    count: int = 0

    @property
    def width(self) -> int | None:
        if self.count and self.item.width is not None:
            return self.count * self.item.width
        return None


Shape = Prim | Blob | Struct | Records


def struct(*fields: tuple[str, Shape]) -> Struct:
    return Struct(tuple(fields))


def handles(shape_cls: type) -> Callable:
    """Decorator that registers a method as decoder for a shape type."""

    def decorator(method: Callable) -> Callable:
        method._handles_shape = shape_cls
        return method

    return decorator


class ShapeDispatch:
    """Dispatches decode() to the method registered for the shape's type."""

    _handlers: dict[type, str]

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        cls._handlers = {}
        for base in reversed(cls.__mro__):
            if hasattr(base, "_handlers"):
                cls._handlers.update(base._handlers)
        for name in vars(cls):
            method = getattr(cls, name)
            if callable(method) and hasattr(method, "_handles_shape"):
                cls._handlers[method._handles_shape] = name

    def decode(self, shape: Shape, cursor: Cursor, path: str) -> object:
        handler_name = self._handlers.get(type(shape))
        if handler_name is None:
            raise TypeError(f"unsupported shape: {shape!r}")
        return getattr(self, handler_name)(shape, cursor, path)


class PayloadDecoder(ShapeDispatch):
    """Decodes one payload against a shape, collecting diagnostics.

    Malformed primitives become Malformed markers at their own path.
    Running out of bytes raises TruncatedError; the caller decides what
    that means for the surrounding element.
    """

    def __init__(self, diagnostics: list[Diagnostic], tag: int | None = None) -> None:
        self.diagnostics = diagnostics
        self.tag = tag

    def note(
        self,
        kind: DiagnosticKind,
        offset: int,
        message: str,
        path: str | None = None,
        fatal: bool = False,
    ) -> Diagnostic:
        diag = Diagnostic(
            kind=kind, offset=offset, message=message,
            tag=self.tag, field=path, fatal=fatal,
        )
        lg.debug("%s", diag)
        self.diagnostics.append(diag)
        return diag

    def decode_element(self, shape: Shape, cursor: Cursor, path: str) -> object:
        """Decode a whole element payload; the shape should consume all of it."""
        start = cursor.offset
        try:
            value = self.decode(shape, cursor, path)
        except TruncatedError as e:
            self.note(DiagnosticKind.MALFORMED, start, f"payload too short: {e}", path)
            return Malformed(raw=cursor.window, reason="payload too short")
        if not cursor.at_end:
            self.note(
                DiagnosticKind.MALFORMED, cursor.offset,
                f"{cursor.remaining} trailing bytes ignored", path,
            )
        return value

    # -- shapes --

    @handles(Prim)
    def _prim(self, shape: Prim, cursor: Cursor, path: str) -> object:
        offset = cursor.offset
        raw = cursor.take_rest() if shape.width is None else cursor.take(shape.width)
        try:
            return shape.decode(raw)
        except MalformedError as e:
            self.note(DiagnosticKind.MALFORMED, offset, str(e), path)
            return Malformed(raw=raw, reason=str(e))

    @handles(Blob)
    def _blob(self, shape: Blob, cursor: Cursor, path: str) -> bytes:
        if shape.width is None:
            return cursor.take_rest()
        return cursor.take(shape.width)

    @handles(Struct)
    def _struct(self, shape: Struct, cursor: Cursor, path: str) -> dict[str, object]:
        out: dict[str, object] = {}
        for name, field_shape in shape.fields:
            out[name] = self.decode(field_shape, cursor, f"{path}.{name}")
        return out

    @handles(Records)
    def _records(self, shape: Records, cursor: Cursor, path: str) -> list[object]:
        width = shape.item.width
        out: list[object] = []
        if shape.count_width:
            count = cursor.uint(shape.count_width)
            for i in range(count):
                out.append(self.decode(shape.item, cursor, f"{path}[{i}]"))
            return out

        if shape.count:
            for i in range(shape.count):
                if shape.skip_empty and width is not None and not any(cursor.peek(width)):
                    cursor.skip(width)
                    continue
                out.append(self.decode(shape.item, cursor, f"{path}[{i}]"))
            return out

        if width is None:
            i = 0
            while not cursor.at_end:
                out.append(self.decode(shape.item, cursor, f"{path}[{i}]"))
                i += 1
            return out

        i = 0
        while cursor.remaining >= width:
            if shape.skip_empty and not any(cursor.peek(width)):
                cursor.skip(width)
            else:
                out.append(self.decode(shape.item, cursor, f"{path}[{i}]"))
            i += 1
        if not cursor.at_end:
            self.note(
                DiagnosticKind.MALFORMED, cursor.offset,
                f"{cursor.remaining} bytes do not fill a {width}-byte record", path,
            )
            cursor.skip(cursor.remaining)
        return out
