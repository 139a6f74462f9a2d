import enum
import typing

import msgspec


@enum.unique
class KeyboardLayout(enum.Enum):
    QWERTY = "qwerty"
    SYMBOLS = "symbols"
    EMOJI = "emoji"


@enum.unique
class CandidateSource(enum.Enum):
    CODE_TABLE = "code_table"
    USER = "user"


class Candidate(msgspec.Struct, frozen=True):
    text: str
    code: str
    weight: int = 0
    comment: typing.Optional[str] = None
    source: CandidateSource = CandidateSource.CODE_TABLE


class ShuruError(Exception):
    pass


class DictionaryFormatError(ShuruError):
    pass


class UnknownFormulaError(ShuruError):
    def __init__(self, formula_id: str):
        self.formula_id = formula_id
        return super().__init__(f"No formula with id {formula_id!r}")
