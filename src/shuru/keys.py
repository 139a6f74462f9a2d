# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import msgspec


class Alpha(msgspec.Struct, frozen=True):
    char: str


class RawText(msgspec.Struct, frozen=True):
    text: str


class AsciiModeSwitch(msgspec.Struct, frozen=True):
    pass


class Enter(msgspec.Struct, frozen=True):
    pass


class Delete(msgspec.Struct, frozen=True):
    pass


class Shift(msgspec.Struct, frozen=True):
    pass


class Comma(msgspec.Struct, frozen=True):
    pass


class Space(msgspec.Struct, frozen=True):
    pass


class Period(msgspec.Struct, frozen=True):
    pass


class Symbols(msgspec.Struct, frozen=True):
    pass


class Emoji(msgspec.Struct, frozen=True):
    pass


class Abc(msgspec.Struct, frozen=True):
    pass


KeyEvent = Alpha | RawText | AsciiModeSwitch | Enter | Delete | Shift | Comma | Space | Period | Symbols | Emoji | Abc

PUNCTUATION_KEYS = {
    ",": Comma(),
    " ": Space(),
    ".": Period(),
}


def key_for_character(char: str) -> KeyEvent:
    "Map a single typed character to the key that would have produced it on the QWERTY layout."
    if char in PUNCTUATION_KEYS:
        return PUNCTUATION_KEYS[char]
    if char == "\n":
        return Enter()
    if char.isascii() and char.isalpha():
        return Alpha(char=char)
    return RawText(text=char)
