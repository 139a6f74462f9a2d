# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import logging
import typing
from contextlib import aclosing

import attr
import trio_util

from .commontypes import Candidate, KeyboardLayout
from .host import NullTextHost
from .keys import Abc, Alpha, AsciiModeSwitch, Comma, Delete, Emoji, Enter, Period, RawText, Shift, Space, Symbols, key_for_character
from .matchers import NullMatcher

if typing.TYPE_CHECKING:
    import trio

    from .host import TextHost
    from .keys import KeyEvent
    from .matchers import Matcher

logger = logging.getLogger(__name__)

FULLWIDTH_PUNCTUATION = {
    Comma: "，",
    Space: "　",
    Period: "。",
}

LAYOUT_KEYS = {
    Symbols: KeyboardLayout.SYMBOLS,
    Emoji: KeyboardLayout.EMOJI,
    Abc: KeyboardLayout.QWERTY,
}


def join_display(committed_input: str, pending_buffer: str) -> str:
    if committed_input and pending_buffer:
        return f"{committed_input} {pending_buffer}"
    return committed_input or pending_buffer


@attr.frozen(kw_only=True)
class CompositionState:
    committed_input: str = attr.field(default="")
    pending_buffer: str = attr.field(default="")
    candidates: tuple[Candidate, ...] = attr.field(default=(), converter=tuple)
    is_ascii_mode: bool = attr.field(default=False)
    is_capital_pending: bool = attr.field(default=False)
    keyboard_layout: KeyboardLayout = attr.field(default=KeyboardLayout.QWERTY)

    @property
    def display_input(self):
        return join_display(self.committed_input, self.pending_buffer)


Listener = typing.Callable[[CompositionState], None]


class Subscription:
    def __init__(self, listeners: list[Listener], listener: Listener):
        self._listeners = listeners
        self._listener = listener

    @property
    def active(self):
        return self._listener in self._listeners

    def cancel(self):
        if self.active:
            self._listeners.remove(self._listener)


# The composition is split in two. committed_input is the longest spelling typed so far which
# still matches something; pending_buffer holds whatever was typed after that stopped being
# true. Nothing re-examines pending_buffer while typing. It is only peeled by Delete, flushed
# by Enter, or greedily reabsorbed after a candidate is committed.
class CompositionEngine:
    def __init__(self, matcher: typing.Optional[Matcher] = None, host: typing.Optional[TextHost] = None):
        self.matcher = matcher if matcher is not None else NullMatcher()
        self.host = host if host is not None else NullTextHost()

        self._committed_input = ""
        self._pending_buffer = ""
        self._candidates: tuple[Candidate, ...] = ()
        self._is_ascii_mode = False
        self._is_capital_pending = False
        self._keyboard_layout = KeyboardLayout.QWERTY

        # Renderers read .value directly or await wait_value()/eventual_values().
        self.state_changes: trio_util.AsyncValue[CompositionState] = trio_util.AsyncValue(CompositionState())
        self.display_input: trio_util.AsyncValue[str] = trio_util.AsyncValue("")
        self.candidates: trio_util.AsyncValue[tuple[Candidate, ...]] = trio_util.AsyncValue(())
        self.is_ascii_mode: trio_util.AsyncValue[bool] = trio_util.AsyncValue(False)
        self.keyboard_layout: trio_util.AsyncValue[KeyboardLayout] = trio_util.AsyncValue(KeyboardLayout.QWERTY)
        self._listeners: list[Listener] = []

    @property
    def state(self) -> CompositionState:
        return CompositionState(
            committed_input=self._committed_input,
            pending_buffer=self._pending_buffer,
            candidates=self._candidates,
            is_ascii_mode=self._is_ascii_mode,
            is_capital_pending=self._is_capital_pending,
            keyboard_layout=self._keyboard_layout,
        )

    def subscribe(self, listener: Listener) -> Subscription:
        """Call listener synchronously with each new snapshot.

        Listeners run after every observable value has been updated, in subscription order.
        """
        self._listeners.append(listener)
        return Subscription(self._listeners, listener)

    def _publish(self):
        state = self.state
        self.display_input.value = state.display_input
        self.candidates.value = state.candidates
        self.is_ascii_mode.value = state.is_ascii_mode
        self.keyboard_layout.value = state.keyboard_layout
        if state == self.state_changes.value:
            return
        self.state_changes.value = state
        # listeners may cancel their own subscription while being called
        for listener in list(self._listeners):
            listener(state)

    def _search(self, query: str) -> tuple[Candidate, ...]:
        return tuple(self.matcher.search(query))

    def handle_key(self, event: KeyEvent):
        match event:
            case Alpha(char=char):
                self._handle_alpha(char)
            case RawText(text=text):
                self.host.commit_text(text)
            case AsciiModeSwitch():
                self._is_ascii_mode = not self._is_ascii_mode
            case Enter():
                self._handle_enter()
            case Delete():
                self._handle_delete()
            case Shift():
                # only committed_input counts here; a non-empty pending_buffer does not block capitalization
                if not self._committed_input:
                    self._is_capital_pending = True
            case Comma() | Space() | Period():
                self.host.commit_text(FULLWIDTH_PUNCTUATION[type(event)])
            case Symbols() | Emoji() | Abc():
                self._keyboard_layout = LAYOUT_KEYS[type(event)]
            case _:
                logger.debug("Ignoring key event %r", event)
                return
        self._publish()

    def _handle_alpha(self, char: str):
        if self._is_ascii_mode:
            self.host.commit_text(char)
            return

        if self._is_capital_pending:
            self.host.commit_text(char.upper())
            self._is_capital_pending = False
            return

        potential_input = self._committed_input + char
        potential_candidates = self._search(potential_input)
        if potential_candidates:
            logger.debug("%r matches %d candidates", potential_input, len(potential_candidates))
            self._committed_input = potential_input
            self._candidates = potential_candidates
        else:
            logger.debug("%r matches nothing; buffering %r", potential_input, char)
            self._pending_buffer += char

    def _handle_enter(self):
        if not (self._committed_input or self._pending_buffer):
            self.host.handle_enter()
            return
        self.host.commit_text(self._committed_input + self._pending_buffer)
        self._reset_composition()

    def _handle_delete(self):
        if self._pending_buffer:
            self._pending_buffer = self._pending_buffer[:-1]
            return
        if not self._committed_input:
            self.host.handle_delete()
            return
        self._committed_input = self._committed_input[:-1]
        self._candidates = self._search(self._committed_input) if self._committed_input else ()

    def _reset_composition(self):
        self._committed_input = ""
        self._pending_buffer = ""
        self._candidates = ()

    def commit_candidate(self, candidate: Candidate):
        self.host.commit_text(candidate.text)
        self._committed_input = ""
        self._candidates = ()

        while self._pending_buffer:
            potential_input = self._committed_input + self._pending_buffer[0]
            potential_candidates = self._search(potential_input)
            if not potential_candidates:
                logger.debug("Reabsorbing stopped at %r; %r stays pending", potential_input, self._pending_buffer)
                break
            self._committed_input = potential_input
            self._pending_buffer = self._pending_buffer[1:]
            self._candidates = potential_candidates

        self._publish()

    def select(self, index: int):
        if not 0 <= index < len(self._candidates):
            raise IndexError(f"No candidate at {index}; there are {len(self._candidates)}")
        self.commit_candidate(self._candidates[index])

    def type_text(self, text: str):
        for char in text:
            self.handle_key(key_for_character(char))

    def dispatch(self, item: KeyEvent | Candidate):
        if isinstance(item, Candidate):
            self.commit_candidate(item)
        else:
            self.handle_key(item)

    async def pump(self, source: trio.MemoryReceiveChannel[KeyEvent | Candidate]):
        async with aclosing(source):
            async for item in source:
                self.dispatch(item)

    def __repr__(self):
        return f"<CompositionEngine {self.state!r}>"

