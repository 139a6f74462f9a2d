import io
import json

import pytest

from shuru.commontypes import DictionaryFormatError
from shuru.deploy import compile_formula, deploy, load_matchers
from shuru.scripts import Repl, format_candidates
from shuru.settings import Settings


@pytest.fixture
def settings(tmp_path):
    pinyin_dir = tmp_path / "config" / "pinyin"
    pinyin_dir.mkdir(parents=True)
    (pinyin_dir / "base.dict.tsv").write_text(
        "text\tcode\tweight\tcomment\n你\tni\t100\t\n泥\tni\t20\tmud\n好\thao\t90\t\n",
        encoding="utf-8",
    )
    (pinyin_dir / "extra.dict.tsv").write_text("# phrases\ntext\tcode\tweight\n你好\tnihao\t80\n", encoding="utf-8")
    wubi_dir = tmp_path / "config" / "wubi"
    wubi_dir.mkdir()
    (wubi_dir / "wubi.dict.tsv").write_text("text\tcode\tweight\n你\twq\t100\n", encoding="utf-8")

    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps(
            {
                "formulas": [
                    {"id": "pinyin", "name": "拼音", "dictionaries": ["base.dict.tsv", "extra.dict.tsv"]},
                    {"id": "wubi", "dictionaries": ["wubi.dict.tsv"]},
                ],
                "active_formula": "pinyin",
                "config_dir": "config",
                "target_dir": "target",
                "candidate_page_size": 2,
            }
        ),
        encoding="utf-8",
    )
    return Settings.load(path)


def test_deploy(settings):
    assert deploy(settings) == {"pinyin": 4, "wubi": 1}
    assert settings.database_path(settings.formula("pinyin")).is_file()
    # redeploying replaces rather than appends
    assert compile_formula(settings, settings.formula("pinyin")) == 4


def test_load_matchers(settings):
    deploy(settings)
    manager = load_matchers(settings)
    assert manager.active_id == "pinyin"
    assert [c.text for c in manager.search("ni")] == ["你", "你好", "泥"]
    manager.set_active("wubi")
    assert [c.text for c in manager.search("w")] == ["你"]


def test_load_matchers_skips_undeployed(settings):
    compile_formula(settings, settings.formula("wubi"))
    manager = load_matchers(settings)
    assert list(manager.matchers) == ["wubi"]
    assert manager.active_id == "wubi"


def test_format_candidates(settings):
    deploy(settings)
    candidates = list(load_matchers(settings).search("ni"))
    assert format_candidates(candidates, 2) == ["1. 你 [ni]", "2. 你好 [nihao]"]
    assert format_candidates(candidates, 8)[-1] == "3. 泥 [ni] (mud)"


def test_repl(settings):
    deploy(settings)
    out = io.StringIO()
    repl = Repl(load_matchers(settings), page_size=settings.candidate_page_size, out=out)

    assert repl.handle_line("nihaoxx")
    assert repl.engine.state.display_input == "nihao xx"
    assert repl.handle_line("1")
    assert repl.host.contents == "你好"
    assert repl.handle_line("3")
    assert repl.handle_line("*enter")
    assert repl.host.contents == "你好xx"
    assert repl.handle_line("*use wubi")
    assert repl.manager.active_id == "wubi"
    assert repl.handle_line("*use cangjie")
    assert repl.handle_line("*delete")
    assert repl.host.contents == "你好x"
    assert not repl.handle_line("*quit")

    lines = out.getvalue().splitlines()
    assert "input: nihao xx" in lines
    assert "1. 你好 [nihao]" in lines
    assert "committed: '你好'" in lines
    assert "error: no candidate 3" in lines
    assert "committed: 'xx'" in lines
    assert "error: No formula with id 'cangjie'" in lines


def test_failed_redeploy_keeps_previous_table(settings):
    deploy(settings)
    pinyin = settings.formula("pinyin")
    extra = settings.dictionary_paths(pinyin)[1]
    extra.write_text("text\tcode\tweight\n你好\tnihao\tnotanint\n", encoding="utf-8")

    with pytest.raises(DictionaryFormatError):
        compile_formula(settings, pinyin)

    manager = load_matchers(settings)
    assert [c.text for c in manager.search("h")] == ["好"]
    assert [c.text for c in manager.search("ni")] == ["你", "你好", "泥"]
