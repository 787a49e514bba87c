import io
import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, BinaryIO, Iterable, Protocol, runtime_checkable

from pdf_errors import WriteError

LITERAL_ESCAPES = "\\()"
NAME_DELIMITERS = b"()<>[]{}/%#"


@runtime_checkable
class Object(Protocol):
    """ Anything that knows how to write itself in object syntax """

    def serialize(self, out: BinaryIO) -> None:
        ...


def write(out: BinaryIO, text: str):
    try:
        out.write(text.encode("ascii"))
    except OSError as e:
        raise WriteError(f"Could not write {text[:20]!r}") from e


def format_number(value: float) -> str:
    """ Shortest decimal spelling of a real, without an exponent (see 7.3.3) """
    if not math.isfinite(value):
        raise ValueError(f"{value} has no object syntax")
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text:
        text = format(Decimal(text), "f")
    return text


def write_literal(out: BinaryIO, text: str):
    """ Write the body of a literal string, escaping backslashes and parentheses (see 7.3.4.2) """
    escaped = []
    for c in text:
        assert c <= "~", f"Only ASCII can be written as a literal string, got {c!r}"
        if c in LITERAL_ESCAPES:
            escaped.append("\\")
        escaped.append(c)
    write(out, "".join(escaped))


def write_name(out: BinaryIO, name: str):
    """ See 7.3.5 """
    encoded = "".join(
        chr(b) if 0x21 <= b <= 0x7e and b not in NAME_DELIMITERS else f"#{b:02X}"
        for b in name.encode("utf-8")
    )
    write(out, "/" + encoded)


def write_list(out: BinaryIO, items: Iterable[Any]):
    write(out, "[")
    for i, item in enumerate(items):
        if i:
            write(out, " ")
        serialize(item, out)
    write(out, "]")


def write_dict(out: BinaryIO, entries: Mapping[str, Any]):
    write(out, "<<")
    for i, (key, value) in enumerate(entries.items()):
        if not isinstance(key, str):
            raise TypeError(f"Dictionary keys must be names, not {type(key).__name__}")
        if i:
            write(out, " ")
        write_name(out, key)
        write(out, " ")
        serialize(value, out)
    write(out, ">>")


def serialize(value: Any, out: BinaryIO):
    if isinstance(value, Object):
        value.serialize(out)
    elif value is None:
        write(out, "null")
    elif isinstance(value, bool):
        write(out, "true" if value else "false")
    elif isinstance(value, int):
        write(out, str(value))
    elif isinstance(value, float):
        write(out, format_number(value))
    elif isinstance(value, str):
        write_literal(out, value)
    elif isinstance(value, Mapping):
        write_dict(out, value)
    elif isinstance(value, (list, tuple)):
        write_list(out, value)
    else:
        raise TypeError(f"Cannot write a {type(value).__name__} in object syntax")


def to_bytes(value: Any) -> bytes:
    out = io.BytesIO()
    serialize(value, out)
    return out.getvalue()
