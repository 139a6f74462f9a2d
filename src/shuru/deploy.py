from __future__ import annotations

import logging
import typing

from .db import make_db
from .dictionary import read_dictionary
from .matchers import CodeTableMatcher, MatcherManager

if typing.TYPE_CHECKING:
    from .settings import Formula, Settings

logger = logging.getLogger(__name__)


def compile_formula(settings: Settings, formula: Formula) -> int:
    """Rebuild the formula's code table from its dictionary sources. Returns the number of entries written."""
    items = []
    for dict_path in settings.dictionary_paths(formula):
        items.extend(read_dictionary(dict_path))
    db = make_db(settings.database_path(formula))
    try:
        total = db.replace_items(items)
    finally:
        db.close()
    logger.info("Compiled %s (%s): %d entries", formula.id, formula.display_name, total)
    return total


def deploy(settings: Settings) -> dict[str, int]:
    return {formula.id: compile_formula(settings, formula) for formula in settings.formulas}


def load_matchers(settings: Settings) -> MatcherManager:
    """Open every compiled formula and make the configured one active.

    Formulas that have not been deployed yet are skipped with a warning.
    """
    manager = MatcherManager()
    for formula in settings.formulas:
        db_path = settings.database_path(formula)
        if not db_path.is_file():
            logger.warning("Formula %s has not been deployed (%s is missing)", formula.id, db_path)
            continue
        manager.add(formula.id, CodeTableMatcher(make_db(db_path)))
    if settings.active_formula in manager.matchers:
        manager.set_active(settings.active_formula)
    return manager
