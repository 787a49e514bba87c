import logging
import typing
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, BinaryIO, Generic, Protocol, Self, TypeVar

from pdf_errors import FollowReference, PdfError, UnexpectedPrimitive
from pdf_ref import PlainRef, Ref
from pdf_structures import PdfDict, PdfPrimitive, PdfReference, PdfStream
from pdf_writer import serialize

log = logging.getLogger(__name__)

T = TypeVar("T")


class Resolve(Protocol):
    """
    Maps a reference to the primitive it points at.

    Closures over a cross-reference table, bound methods and objects with a
    __call__ all qualify. Repeated calls within one document revision must
    return the same primitive; nothing here caches the result.
    """

    def __call__(self, r: PlainRef) -> PdfPrimitive:
        ...


class NoResolve:
    """ For operations that must never need to follow a reference """

    def __call__(self, r: PlainRef) -> PdfPrimitive:
        log.debug("Refusing to resolve %s", r)
        raise FollowReference(r, "references may not be followed here")

    def __repr__(self):
        return "NO_RESOLVE"


NO_RESOLVE: Resolve = NoResolve()


class DictResolve:
    """ Resolves against an in-memory table of objects keyed by PlainRef """

    def __init__(self, objects: Mapping[PlainRef, PdfPrimitive]):
        self.objects = objects

    def __call__(self, r: PlainRef) -> PdfPrimitive:
        try:
            p = self.objects[r]
        except KeyError:
            raise FollowReference(r, "no such object") from None
        log.debug("Resolved %s to %s", r, p.type_name)
        return p


class FromPrimitive(Protocol):
    @classmethod
    def from_primitive(cls, p: PdfPrimitive, resolve: Resolve) -> Self:
        ...


class FromDict(Protocol):
    @classmethod
    def from_dict(cls, d: PdfDict, resolve: Resolve) -> Self:
        ...


class FromStream(Protocol):
    @classmethod
    def from_stream(cls, s: PdfStream, resolve: Resolve) -> Self:
        ...


def deref(p: PdfPrimitive, resolve: Resolve) -> PdfPrimitive:
    """ Follow references until reaching something that is not a reference """
    seen = set()
    while isinstance(p, PdfReference):
        r = p.as_reference()
        if r in seen:
            raise FollowReference(r, "reference cycle")
        seen.add(r)
        p = resolve(r)
    return p


_scalars = {
    int: "as_integer",
    float: "as_number",
    bool: "as_bool",
    str: "as_name",
    bytes: "as_string",
}


def convert(target: Any, p: PdfPrimitive, resolve: Resolve) -> Any:
    """
    Build a `target` from a primitive.

    References are only followed where a value has to be read out of them:
    scalars, dictionaries and streams. PlainRef, Ref and MaybeRef targets keep
    references as they are, so cyclic graphs convert without recursing.
    """
    origin = typing.get_origin(target)
    if origin is MaybeRef:
        item_type, = typing.get_args(target)
        return MaybeRef.from_primitive(p, resolve, item_type)
    if origin is list:
        item_type, = typing.get_args(target)
        return [convert(item_type, item, resolve) for item in deref(p, resolve).as_array()]

    if target is PlainRef:
        return p.as_reference()
    if target is PdfPrimitive:
        return p
    if isinstance(target, type) and issubclass(target, PdfPrimitive):
        p = deref(p, resolve)
        if not isinstance(p, target):
            raise UnexpectedPrimitive(target.type_name, p.type_name)
        return p
    if target in _scalars:
        return getattr(deref(p, resolve), _scalars[target])()

    if hasattr(target, "from_primitive"):
        return target.from_primitive(p, resolve)
    if hasattr(target, "from_stream"):
        return target.from_stream(deref(p, resolve).as_stream(), resolve)
    if hasattr(target, "from_dict"):
        return target.from_dict(deref(p, resolve).as_dict(), resolve)
    raise TypeError(f"Don't know how to build a {target!r} from a primitive")


def follow(ref: Ref | PlainRef, target: Any, resolve: Resolve) -> Any:
    """ Resolve one reference and build a `target` from what it points at """
    r = ref.inner if isinstance(ref, Ref) else ref
    log.debug("Following %s", r)
    try:
        return convert(target, resolve(r), resolve)
    except PdfError as e:
        e.add_note(f"While following {r} to {getattr(target, '__name__', target)}")
        raise


class MaybeRef(Generic[T], ABC):
    """
    A value that may be stored inline or as an indirect object.
    Either Owned(value) or Reference(ref).
    """

    @staticmethod
    def from_primitive(p: PdfPrimitive, resolve: Resolve, target: Any) -> "MaybeRef":
        if isinstance(p, PdfReference):
            return Reference(Ref(p.as_reference()))
        return Owned(convert(target, p, resolve))

    @abstractmethod
    def get(self, resolve: Resolve, target: Any) -> T:
        ...

    @abstractmethod
    def serialize(self, out: BinaryIO):
        ...


@dataclass(frozen=True)
class Owned(MaybeRef[T]):
    value: T

    def get(self, resolve: Resolve, target: Any) -> T:
        return self.value

    def serialize(self, out: BinaryIO):
        serialize(self.value, out)


@dataclass(frozen=True)
class Reference(MaybeRef[T]):
    ref: Ref[T]

    def __post_init__(self):
        if not isinstance(self.ref, Ref):
            raise TypeError(f"Reference holds a Ref, not {type(self.ref).__name__}")

    def get(self, resolve: Resolve, target: Any) -> T:
        return follow(self.ref, target, resolve)

    def serialize(self, out: BinaryIO):
        self.ref.serialize(out)
