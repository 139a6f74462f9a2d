from __future__ import annotations

import logging
import typing

import msgspec

from .commontypes import Candidate, CandidateSource, DictionaryFormatError

if typing.TYPE_CHECKING:
    import collections.abc
    import pathlib

logger = logging.getLogger(__name__)

FIELDS = ("text", "code", "weight", "comment")


class DictItem(msgspec.Struct, frozen=True):
    text: str
    code: str
    weight: int = 0
    comment: typing.Optional[str] = None

    def to_candidate(self, source: CandidateSource = CandidateSource.CODE_TABLE):
        return Candidate(text=self.text, code=self.code, weight=self.weight, comment=self.comment, source=source)


def _uncommented(lines: collections.abc.Iterable[str]):
    # yields (line number, line) so errors can point at the source file's own numbering
    for lineno, line in enumerate(lines, start=1):
        if line.startswith("#") or not line.strip():
            continue
        yield lineno, line


def parse_dictionary(lines: collections.abc.Iterable[str], source_name: str = "<dictionary>") -> list[DictItem]:
    """Parse a tab-separated code table.

    The first uncommented line is a header naming the columns; text and code are required,
    weight and comment are optional. Lines starting with # are ignored.
    """
    numbered = _uncommented(lines)
    try:
        _, header_line = next(numbered)
    except StopIteration:
        return []
    header = [name.strip() for name in header_line.rstrip("\r\n").split("\t")]
    if "text" not in header or "code" not in header:
        raise DictionaryFormatError(f"{source_name}: header must name at least the text and code columns, found {header!r}")
    unknown = set(header) - set(FIELDS)
    if unknown:
        raise DictionaryFormatError(f"{source_name}: unknown columns {sorted(unknown)!r}")

    items = []
    for lineno, line in numbered:
        row = line.rstrip("\r\n").split("\t")
        if len(row) > len(header):
            raise DictionaryFormatError(f"{source_name}:{lineno}: expected at most {len(header)} fields, found {len(row)}")
        fields = dict(zip(header, row))
        if not fields.get("text") or not fields.get("code"):
            raise DictionaryFormatError(f"{source_name}:{lineno}: text and code must not be empty")
        weight = fields.get("weight") or "0"
        try:
            weight = int(weight)
        except ValueError:
            raise DictionaryFormatError(f"{source_name}:{lineno}: weight {weight!r} is not an integer") from None
        items.append(
            DictItem(
                text=fields["text"],
                code=fields["code"],
                weight=weight,
                comment=fields.get("comment") or None,
            )
        )
    return items


def read_dictionary(path: pathlib.Path) -> list[DictItem]:
    with path.open(encoding="utf-8", newline="") as f:
        items = parse_dictionary(f, source_name=str(path))
    logger.debug("Read %d entries from %s", len(items), path)
    return items
