from dataclasses import dataclass
from typing import TYPE_CHECKING, BinaryIO, Generic, Self, TypeVar

from pdf_writer import write

if TYPE_CHECKING:
    from pdf_object import Resolve
    from pdf_structures import PdfPrimitive

MAX_OBJ_NR = 2 ** 64 - 1
MAX_GEN_NR = 2 ** 16 - 1

T = TypeVar("T")


def _check_range(label: str, value: int, maximum: int):
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{label} must be an integer, not {type(value).__name__}")
    if not 0 <= value <= maximum:
        raise ValueError(f"{label} {value} is outside 0..{maximum}")


@dataclass(frozen=True, slots=True, order=True)
class PlainRef:
    """ Object and generation number of an indirect object (see 7.3.10) """
    id: int
    gen: int = 0

    def __post_init__(self):
        _check_range("Object number", self.id, MAX_OBJ_NR)
        _check_range("Generation number", self.gen, MAX_GEN_NR)

    def __str__(self):
        return f"{self.id} {self.gen} R"

    def serialize(self, out: BinaryIO):
        write(out, str(self))


class Ref(Generic[T]):
    """
    A PlainRef that is expected to resolve to a T.

    T only exists for type checkers: instances are slotted and immutable, so
    nothing about T is kept at runtime and two Refs are equal when their
    PlainRefs are.
    """
    __slots__ = ("inner",)

    def __init__(self, inner: PlainRef):
        if not isinstance(inner, PlainRef):
            raise TypeError(f"Ref wraps a PlainRef, not {type(inner).__name__}")
        object.__setattr__(self, "inner", inner)

    def __setattr__(self, name, value):
        raise AttributeError(f"Ref is immutable, cannot set {name}")

    def __delattr__(self, name):
        raise AttributeError(f"Ref is immutable, cannot delete {name}")

    def __eq__(self, other):
        return isinstance(other, Ref) and self.inner == other.inner

    def __hash__(self):
        return hash((Ref, self.inner))

    def __repr__(self):
        return f"Ref({self.inner!r})"

    def __reduce__(self):
        return Ref, (self.inner,)

    @classmethod
    def from_id(cls, id: int) -> Self:
        return cls(PlainRef(id, 0))

    @classmethod
    def from_primitive(cls, p: "PdfPrimitive", resolve: "Resolve") -> Self:
        return cls(p.as_reference())

    def __str__(self):
        return str(self.inner)

    def serialize(self, out: BinaryIO):
        self.inner.serialize(out)
