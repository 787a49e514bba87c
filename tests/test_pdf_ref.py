import copy
import dataclasses

import pytest

from pdf_errors import UnexpectedPrimitive
from pdf_object import NO_RESOLVE
from pdf_ref import MAX_GEN_NR, MAX_OBJ_NR, PlainRef, Ref
from pdf_structures import PdfDict, PdfInteger, PdfReference
from pdf_writer import to_bytes


class Page:
    pass


class TestPlainRef:
    @pytest.mark.parametrize("id, gen", [(12, 0), (0, 0), (1, 7), (MAX_OBJ_NR, MAX_GEN_NR)])
    def test_serialize(self, id, gen):
        assert to_bytes(PlainRef(id, gen)) == f"{id} {gen} R".encode()

    def test_generation_defaults_to_zero(self):
        assert PlainRef(12) == PlainRef(12, 0)
        assert str(PlainRef(12)) == "12 0 R"

    @pytest.mark.parametrize("id, gen", [(-1, 0), (MAX_OBJ_NR + 1, 0), (1, -1), (1, MAX_GEN_NR + 1)])
    def test_out_of_range(self, id, gen):
        with pytest.raises(ValueError):
            PlainRef(id, gen)

    @pytest.mark.parametrize("id, gen", [(1.0, 0), ("1", 0), (True, 0), (1, False)])
    def test_not_an_integer(self, id, gen):
        with pytest.raises(TypeError):
            PlainRef(id, gen)

    def test_value_semantics(self):
        r = PlainRef(3, 1)
        assert r == PlainRef(3, 1)
        assert r != PlainRef(3, 0)
        assert len({r, PlainRef(3, 1), PlainRef(4)}) == 2
        assert sorted([PlainRef(4), PlainRef(3, 2), PlainRef(3)]) == [PlainRef(3), PlainRef(3, 2), PlainRef(4)]

    def test_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            PlainRef(1).id = 2


class TestRef:
    def test_from_id(self):
        assert Ref.from_id(5).inner == PlainRef(5, 0)

    def test_equality_only_looks_at_the_reference(self):
        r = PlainRef(9, 2)
        assert Ref[Page](r) == Ref[int](r) == Ref(r)
        assert hash(Ref[Page](r)) == hash(Ref(r))
        assert Ref(r) != Ref(PlainRef(9, 0))

    def test_type_tag_is_not_stored(self):
        ref = Ref[Page](PlainRef(1))
        assert not hasattr(ref, "__orig_class__")
        assert not hasattr(ref, "__dict__")

    def test_wraps_only_plain_refs(self):
        with pytest.raises(TypeError):
            Ref((1, 0))

    def test_copies_are_equal(self):
        ref = Ref[Page](PlainRef(4))
        assert copy.copy(ref) == ref
        assert copy.deepcopy(ref) == ref

    def test_immutable(self):
        ref = Ref.from_id(1)
        with pytest.raises(AttributeError):
            ref.inner = PlainRef(2)
        with pytest.raises(AttributeError):
            del ref.inner
        assert ref.inner == PlainRef(1)

    def test_subscripted_construction(self):
        ref = Ref[Page](PlainRef(12))
        assert type(ref) is Ref
        assert ref.inner == PlainRef(12)
        assert Ref[int].from_id(12) == ref

    def test_serialize_matches_inner(self):
        assert to_bytes(Ref[Page](PlainRef(12, 3))) == b"12 3 R"
        assert str(Ref.from_id(12)) == "12 0 R"

    def test_from_primitive_does_not_resolve(self):
        ref = Ref[Page].from_primitive(PdfReference(PlainRef(3)), NO_RESOLVE)
        assert ref == Ref.from_id(3)

    @pytest.mark.parametrize("p", [PdfDict({"Type": PdfInteger(1)}), PdfInteger(3)])
    def test_from_primitive_type_mismatch(self, p):
        with pytest.raises(UnexpectedPrimitive) as e:
            Ref[Page].from_primitive(p, NO_RESOLVE)
        assert e.value.expected == "Reference"
        assert e.value.found == p.type_name
