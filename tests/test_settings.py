import json
import pathlib

import pytest

from shuru.commontypes import UnknownFormulaError
from shuru.settings import Formula, Settings


def test_for_test():
    settings = Settings.for_test()
    assert settings.active_formula == "pinyin"
    assert settings.formulas == [Formula(id="pinyin", name="拼音", dictionaries=["base.dict.tsv", "extra.dict.tsv"])]
    assert settings.config_dir == pathlib.Path("test_config")
    assert settings.candidate_page_size == 8


def test_load_and_save(tmp_path):
    src = tmp_path / "settings.json"
    src.write_text(
        json.dumps(
            {
                "formulas": [{"id": "wubi", "dictionaries": ["wubi.dict.tsv"]}],
                "active_formula": "wubi",
                "config_dir": "config",
                "target_dir": "/var/lib/shuru",
            }
        ),
        encoding="utf-8",
    )
    settings = Settings.load(src)
    wubi = settings.formula("wubi")
    assert wubi.display_name == "wubi"
    assert settings.candidate_page_size == 8
    assert settings.dictionary_paths(wubi) == [tmp_path / "config" / "wubi" / "wubi.dict.tsv"]
    assert settings.database_path(wubi) == pathlib.Path("/var/lib/shuru/wubi.db3")

    dest = tmp_path / "saved.json"
    settings.save(dest)
    raw = json.loads(dest.read_text(encoding="utf-8"))
    assert "_path" not in raw
    assert raw["config_dir"] == "config"
    assert raw["formulas"] == [{"id": "wubi", "name": None, "dictionaries": ["wubi.dict.tsv"]}]


def test_unknown_formula():
    settings = Settings.for_test()
    with pytest.raises(UnknownFormulaError):
        settings.formula("cangjie")
    with pytest.raises(UnknownFormulaError):
        settings.set_active_formula("cangjie")
    assert settings.active_formula == "pinyin"
