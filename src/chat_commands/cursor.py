"""Position-tracking cursor over an immutable message buffer."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import re

# `<@12345>` or `<@!12345>`; the id is validated by the caller.
MENTION_RE = re.compile(r"<@!?([^>]*)>")


@dataclass(frozen=True, slots=True)
class Mark:
    """Opaque snapshot returned by :meth:`Cursor.position`."""

    offset: int
    owner: int


class Cursor:
    """Character cursor used by the prefix resolver and grammar matcher.

    Peeks never move the cursor. Only :meth:`advance`, :meth:`eat`,
    :meth:`extract`, :meth:`take_while` and :meth:`restore` do.
    """

    __slots__ = ("_text", "_offset")

    def __init__(self, text: str) -> None:
        self._text = text
        self._offset = 0

    @property
    def offset(self) -> int:
        return self._offset

    def peek_for(self, n: int) -> str:
        """Return up to *n* characters from the current offset."""
        if n <= 0:
            return ""
        return self._text[self._offset : self._offset + n]

    def peek_until(self, predicate: Callable[[str], bool]) -> str:
        """Return characters up to, not including, the first matching *predicate*."""
        end = self._offset
        text = self._text
        while end < len(text) and not predicate(text[end]):
            end += 1
        return text[self._offset : end]

    def take_while(self, predicate: Callable[[str], bool]) -> None:
        text = self._text
        while self._offset < len(text) and predicate(text[self._offset]):
            self._offset += 1

    def skip_whitespace(self) -> None:
        self.take_while(str.isspace)

    def advance(self, n: int) -> None:
        if n < 0 or self._offset + n > len(self._text):
            raise ValueError(
                f"cannot advance {n} characters from offset {self._offset} "
                f"of a {len(self._text)} character buffer"
            )
        self._offset += n

    def eat(self, literal: str) -> bool:
        """Consume *literal* if the buffer continues with it."""
        if not self._text.startswith(literal, self._offset):
            return False
        self._offset += len(literal)
        return True

    def extract(self, pattern: re.Pattern[str]) -> str | None:
        """Consume a match of *pattern* at the offset and return its first group."""
        match = pattern.match(self._text, self._offset)
        if match is None:
            return None
        self._offset = match.end()
        return match.group(1)

    def position(self) -> Mark:
        return Mark(offset=self._offset, owner=id(self))

    def restore(self, mark: Mark) -> None:
        if mark.owner != id(self) or not 0 <= mark.offset <= len(self._text):
            raise ValueError("mark was not produced by this cursor")
        self._offset = mark.offset

    def rest(self) -> str:
        return self._text[self._offset :]
