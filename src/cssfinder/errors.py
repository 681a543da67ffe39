from __future__ import annotations


class FinderError(Exception):
    """Base class for every error raised by cssfinder."""


class InvalidInputError(FinderError, TypeError):
    """The target handed to the finder is not an element node."""


class SelectorNotFoundError(FinderError):
    """No search limit produced a selector matching exactly one element."""


class OracleInconsistencyError(FinderError, RuntimeError):
    """A selector built from the tree itself matched nothing in that tree."""

    def __init__(self, selector: str) -> None:
        super().__init__(f"Can't select any node with this selector: {selector}")
        self.selector = selector
