# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import logging
import sys
import typing

from sqlalchemy import Column, Index, MetaData, Table, and_, func, select
from sqlalchemy.engine import URL as EngineURL
from sqlalchemy.engine import Connection, Engine, create_engine
from sqlalchemy.sql import column, text
from sqlalchemy.types import Integer, String, UnicodeText

from .commontypes import ShuruError
from .dictionary import DictItem

if typing.TYPE_CHECKING:
    import collections.abc
    import pathlib

logger = logging.getLogger(__name__)

metadata = MetaData()

dict_table = Table(
    "dict",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("text", UnicodeText, nullable=False),
    Column("code", String, nullable=False),
    Column("weight", Integer, nullable=False, default=0),
    Column("comment", UnicodeText, nullable=True),
    Index("ix_dict_code_weight", "code", "weight"),
)

DB_VERSION = 1


class DbVersionError(ShuruError):
    pass


def check_version(conn: Connection, path: typing.Optional[pathlib.Path], expected_version: int):
    found_version = conn.scalar(text("PRAGMA user_version").columns(column("version", Integer)))
    if found_version != expected_version:
        raise DbVersionError(f"Expected DB version {expected_version} in {path}, but found {found_version}.")


def set_version(conn: Connection, version: int):
    # looks like pragma does not support bindparams, hence the f-string
    conn.execute(text(f"PRAGMA user_version = {version}"))


def prefix_upper_bound(prefix: str) -> typing.Optional[str]:
    """The smallest string greater than every string starting with prefix, or None if there is none.

    SQLite's LIKE ignores ASCII case, so prefix searches use a range on the (binary collated) code instead.
    UTF-8 sorts bytewise in code point order, which makes the range exact.
    """
    stripped = prefix.rstrip(chr(sys.maxunicode))
    if not stripped:
        return None
    return stripped[:-1] + chr(ord(stripped[-1]) + 1)


def make_db(sqlite_path: typing.Optional[pathlib.Path] = None):
    "Open (creating if needed) the code table at sqlite_path, or a fresh in-memory one if no path is given."
    if sqlite_path is None:
        engine = create_engine("sqlite://", future=True)
        with engine.begin() as conn:
            metadata.create_all(conn)
            set_version(conn, DB_VERSION)
        return DictionaryDb(engine)

    exists = sqlite_path.is_file()
    sqlite_path.parent.mkdir(parents=True, exist_ok=True)
    engine_url = EngineURL.create(drivername="sqlite", database=sqlite_path.__fspath__())
    engine = create_engine(engine_url, future=True)
    with engine.begin() as conn:
        if exists:
            check_version(conn, sqlite_path, DB_VERSION)
        else:
            metadata.create_all(conn)
            set_version(conn, DB_VERSION)
    return DictionaryDb(engine)


def _insert_items(conn: Connection, items: collections.abc.Iterable[DictItem]) -> int:
    rows = [{"text": item.text, "code": item.code, "weight": item.weight, "comment": item.comment} for item in items]
    if rows:
        conn.execute(dict_table.insert(), rows)
    return len(rows)


class DictionaryDb:
    def __init__(self, engine: Engine):
        self.engine = engine

    def add_items(self, items: collections.abc.Iterable[DictItem]):
        with self.engine.begin() as conn:
            return _insert_items(conn, items)

    def replace_items(self, items: collections.abc.Iterable[DictItem]):
        "Swap the whole table for items in one transaction; on any error the old contents stay."
        with self.engine.begin() as conn:
            conn.execute(dict_table.delete())
            return _insert_items(conn, items)

    def clear(self):
        with self.engine.begin() as conn:
            conn.execute(dict_table.delete())

    def count(self) -> int:
        with self.engine.begin() as conn:
            return conn.scalar(select(func.count()).select_from(dict_table))

    def search(self, code_prefix: str) -> list[DictItem]:
        """Find entries whose code starts with code_prefix.

        Each text appears once, with its best-weighted code. Results are ordered by weight (highest first),
        then by code and text so that equal weights come back in a stable order.
        """
        if not code_prefix:
            return []
        condition = dict_table.c.code >= code_prefix
        upper = prefix_upper_bound(code_prefix)
        if upper is not None:
            condition = and_(condition, dict_table.c.code < upper)
        s = (
            select(dict_table.c.text, dict_table.c.code, dict_table.c.weight, dict_table.c.comment)
            .where(condition)
            .order_by(dict_table.c.weight.desc(), dict_table.c.code.asc(), dict_table.c.text.asc())
        )
        seen = set()
        results = []
        with self.engine.begin() as conn:
            for row in conn.execute(s):
                if row.text in seen:
                    continue
                seen.add(row.text)
                results.append(DictItem(**row._mapping))
        return results

    def close(self):
        self.engine.dispose()
