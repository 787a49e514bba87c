from collections.abc import Iterator, Mapping
from typing import Any, BinaryIO, Optional

from pdf_errors import MissingEntry, UnexpectedPrimitive
from pdf_ref import PlainRef, Ref
from pdf_writer import serialize, write, write_dict, write_list, write_name

native_types = int | float | bool | str | bytes | list | dict | PlainRef | None


class PdfPrimitive:
    """ One parsed, untyped node of object syntax """
    type_name = "Primitive"

    def __init__(self, data: Any = None):
        self.data = data

    def __repr__(self):
        return f"{self.__class__.__name__}({self.data!r})"

    def __eq__(self, other):
        return type(self) is type(other) and self.data == other.data

    __hash__ = None

    def as_python(self) -> native_types:
        return self.data

    def serialize(self, out: BinaryIO):
        serialize(self.data, out)

    def _unexpected(self, expected: str):
        return UnexpectedPrimitive(expected, self.type_name)

    def as_integer(self) -> int:
        raise self._unexpected("Integer")

    def as_number(self) -> float:
        raise self._unexpected("Number")

    def as_bool(self) -> bool:
        raise self._unexpected("Boolean")

    def as_name(self) -> str:
        raise self._unexpected("Name")

    def as_string(self) -> bytes:
        raise self._unexpected("String")

    def as_array(self) -> list["PdfPrimitive"]:
        raise self._unexpected("Array")

    def as_dict(self) -> "PdfDict":
        raise self._unexpected("Dictionary")

    def as_stream(self) -> "PdfStream":
        raise self._unexpected("Stream")

    def as_reference(self) -> PlainRef:
        raise self._unexpected("Reference")


class PdfNull(PdfPrimitive):
    type_name = "Null"

    def __init__(self):
        super().__init__(None)

    def __repr__(self):
        return "PdfNull()"


class PdfInteger(PdfPrimitive):
    type_name = "Integer"

    def as_integer(self) -> int:
        return self.data

    def as_number(self) -> float:
        return float(self.data)


class PdfNumber(PdfPrimitive):
    """ See 7.3.3 """
    type_name = "Number"

    def as_number(self) -> float:
        return self.data


class PdfBool(PdfPrimitive):
    type_name = "Boolean"

    def as_bool(self) -> bool:
        return self.data


class PdfString(PdfPrimitive):
    """ See 7.3.4, the raw bytes of a literal or hexadecimal string """
    type_name = "String"

    def as_string(self) -> bytes:
        return self.data

    def serialize(self, out: BinaryIO):
        raise NotImplementedError("Writing strings with an encoding is not supported yet")


class PdfName(PdfPrimitive):
    type_name = "Name"

    def as_name(self) -> str:
        return self.data

    def serialize(self, out: BinaryIO):
        write_name(out, self.data)


class PdfArray(PdfPrimitive):
    type_name = "Array"

    def as_array(self) -> list[PdfPrimitive]:
        return self.data

    def as_python(self) -> native_types:
        return [p.as_python() for p in self.data]

    def serialize(self, out: BinaryIO):
        write_list(out, self.data)


class PdfDict(PdfPrimitive, Mapping):
    """ See 7.3.7, entries are kept in the order they were added """
    type_name = "Dictionary"

    def __init__(self, data: Optional[dict[str, PdfPrimitive]] = None):
        super().__init__({} if data is None else dict(data))

    def __getitem__(self, key: str) -> PdfPrimitive:
        return self.data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def __len__(self):
        return len(self.data)

    __eq__ = PdfPrimitive.__eq__

    def __setitem__(self, key: str, value: PdfPrimitive):
        self.data[key] = value

    def require(self, key: str) -> PdfPrimitive:
        try:
            return self.data[key]
        except KeyError:
            raise MissingEntry(key) from None

    def as_dict(self) -> "PdfDict":
        return self

    def as_python(self) -> native_types:
        return {k: v.as_python() for k, v in self.data.items()}

    def serialize(self, out: BinaryIO):
        write_dict(out, self.data)


class PdfStream(PdfPrimitive):
    """ See 7.3.8, a stream dictionary followed by its undecoded bytes """
    type_name = "Stream"

    def __init__(self, info: PdfDict, data: bytes = b""):
        super().__init__(data)
        self.info = info

    def __repr__(self):
        return f"PdfStream({self.info!r}, {len(self.data)} bytes)"

    def __eq__(self, other):
        return super().__eq__(other) and self.info == other.info

    __hash__ = None

    def as_stream(self) -> "PdfStream":
        return self

    def as_python(self) -> native_types:
        return {"info": self.info.as_python(), "data": self.data}

    def serialize(self, out: BinaryIO):
        raise NotImplementedError("Writing stream bodies is not supported yet")


class PdfReference(PdfPrimitive):
    """ See 7.3.10 """
    type_name = "Reference"

    def __init__(self, data: PlainRef):
        if not isinstance(data, PlainRef):
            raise TypeError(f"A reference holds a PlainRef, not {type(data).__name__}")
        super().__init__(data)

    def as_reference(self) -> PlainRef:
        return self.data

    def serialize(self, out: BinaryIO):
        self.data.serialize(out)


def from_python(value: Any) -> PdfPrimitive:
    """
    Build a primitive from plain python values.
    Strings become names, bytes become strings and Refs become references.
    """
    if isinstance(value, PdfPrimitive):
        return value
    elif value is None:
        return PdfNull()
    elif isinstance(value, bool):
        return PdfBool(value)
    elif isinstance(value, int):
        return PdfInteger(value)
    elif isinstance(value, float):
        return PdfNumber(value)
    elif isinstance(value, str):
        return PdfName(value)
    elif isinstance(value, bytes):
        return PdfString(value)
    elif isinstance(value, PlainRef):
        return PdfReference(value)
    elif isinstance(value, Ref):
        return PdfReference(value.inner)
    elif isinstance(value, Mapping):
        return PdfDict({k: from_python(v) for k, v in value.items()})
    elif isinstance(value, (list, tuple)):
        return PdfArray([from_python(v) for v in value])
    else:
        raise TypeError(f"No primitive for a {type(value).__name__}")
