import pytest

from pdf_object import DictResolve
from pdf_ref import PlainRef
from pdf_structures import from_python


class CountingResolve(DictResolve):
    """ Records every reference it is asked for """

    def __init__(self, objects):
        super().__init__(objects)
        self.calls = []

    def __call__(self, r):
        self.calls.append(r)
        return super().__call__(r)


@pytest.fixture
def objects():
    """
    A small document whose pages point back at their parent:

        1 Catalog -> 2 Pages -> [3 Page, 4 Page] -> 2 Pages
    """
    return {
        PlainRef(1): from_python({"Type": "Catalog", "Pages": PlainRef(2)}),
        PlainRef(2): from_python({"Type": "Pages", "Kids": [PlainRef(3), PlainRef(4)], "Count": 2}),
        PlainRef(3): from_python({
            "Type": "Page",
            "Parent": PlainRef(2),
            "MediaBox": [0, 0, 612, 792],
            "Resources": {"Font": {"F1": PlainRef(6)}},
        }),
        PlainRef(4): from_python({
            "Type": "Page",
            "Parent": PlainRef(2),
            "MediaBox": PlainRef(7),
            "Resources": PlainRef(5),
        }),
        PlainRef(5): from_python({"Font": {"F1": PlainRef(6), "F2": PlainRef(6)}}),
        PlainRef(6): from_python({"Type": "Font", "BaseFont": "Helvetica"}),
        PlainRef(7): from_python([0, 0, 595.5, 842]),
        PlainRef(8): from_python(PlainRef(9)),
        PlainRef(9): from_python(PlainRef(8)),
        PlainRef(10): from_python(PlainRef(11, 1)),
        PlainRef(11, 1): from_python(17),
    }


@pytest.fixture
def resolve(objects):
    return CountingResolve(objects)
