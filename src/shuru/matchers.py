from __future__ import annotations

import logging
import typing

from .commontypes import Candidate, CandidateSource, UnknownFormulaError

if typing.TYPE_CHECKING:
    import collections.abc

    from .db import DictionaryDb

logger = logging.getLogger(__name__)


class Matcher(typing.Protocol):
    def search(self, query: str) -> collections.abc.Sequence[Candidate]: ...


class NullMatcher:
    def search(self, query: str) -> collections.abc.Sequence[Candidate]:
        return ()


class CodeTableMatcher:
    """Looks up candidates in a compiled code table.

    A query matches every entry whose code it is a prefix of; so "n" finds everything spelled with a leading n,
    ranked by weight.
    """

    def __init__(self, db: DictionaryDb, source: CandidateSource = CandidateSource.CODE_TABLE):
        self.db = db
        self.source = source

    def search(self, query: str) -> collections.abc.Sequence[Candidate]:
        return [item.to_candidate(self.source) for item in self.db.search(query)]


class MatcherManager:
    def __init__(self, matchers: typing.Optional[dict[str, Matcher]] = None, active: typing.Optional[str] = None):
        self.matchers: dict[str, Matcher] = dict(matchers) if matchers else {}
        self.active_id: typing.Optional[str] = None
        if active is not None:
            self.set_active(active)
        elif self.matchers:
            self.active_id = next(iter(self.matchers))

    def add(self, formula_id: str, matcher: Matcher):
        self.matchers[formula_id] = matcher
        if self.active_id is None:
            self.active_id = formula_id

    def set_active(self, formula_id: str):
        if formula_id not in self.matchers:
            raise UnknownFormulaError(formula_id)
        logger.debug("Switching active formula from %r to %r", self.active_id, formula_id)
        self.active_id = formula_id

    @property
    def active(self) -> Matcher:
        if self.active_id is None:
            return NullMatcher()
        return self.matchers[self.active_id]

    def search(self, query: str) -> collections.abc.Sequence[Candidate]:
        return self.active.search(query)
