from __future__ import annotations

import logging
import typing

logger = logging.getLogger(__name__)


class TextHost(typing.Protocol):
    def commit_text(self, text: str) -> None: ...

    def handle_enter(self) -> None: ...

    def handle_delete(self) -> None: ...


class NullTextHost:
    """Stands in when no real text field is attached. Accepts everything, does nothing."""

    def commit_text(self, text: str) -> None:
        logger.debug("No text host; dropping commit of %r", text)

    def handle_enter(self) -> None:
        pass

    def handle_delete(self) -> None:
        pass


class BufferTextHost:
    """A text field kept in memory.

    Enter appends a newline, and delete removes the final character (if any).
    If on_commit is given, it is called with each piece of committed text.
    """

    def __init__(self, on_commit: typing.Optional[typing.Callable[[str], None]] = None):
        self.contents = ""
        self.on_commit = on_commit

    def commit_text(self, text: str) -> None:
        self.contents += text
        if self.on_commit is not None:
            self.on_commit(text)

    def handle_enter(self) -> None:
        self.commit_text("\n")

    def handle_delete(self) -> None:
        self.contents = self.contents[:-1]

    def __str__(self):
        return self.contents
