from typing import Any


class PdfError(Exception):
    pass


class FollowReference(PdfError):
    """ Raised when a reference cannot, or may not, be resolved """

    def __init__(self, ref: Any, reason: str = "could not follow reference"):
        super().__init__(f"{reason}: {ref}")
        self.ref = ref
        self.reason = reason


class UnexpectedPrimitive(PdfError):
    def __init__(self, expected: str, found: str):
        super().__init__(f"Expected {expected}, found {found}")
        self.expected = expected
        self.found = found


class MissingEntry(UnexpectedPrimitive):
    def __init__(self, key: str):
        super().__init__(f"a /{key} entry", "none")
        self.key = key


class WriteError(PdfError):
    pass
