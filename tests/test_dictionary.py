import pytest

from shuru.commontypes import Candidate, CandidateSource, DictionaryFormatError
from shuru.dictionary import DictItem, parse_dictionary, read_dictionary

SAMPLE = """\
# base dictionary
text\tcode\tweight\tcomment
你\tni\t100\t
泥\tni\t20\tmud
你好\tnihao\t80

# trailing comment
"""


def test_parse_dictionary():
    items = parse_dictionary(SAMPLE.splitlines(keepends=True))
    assert items == [
        DictItem(text="你", code="ni", weight=100),
        DictItem(text="泥", code="ni", weight=20, comment="mud"),
        DictItem(text="你好", code="nihao", weight=80),
    ]


def test_optional_columns():
    items = parse_dictionary(["code\ttext\n", "a\t啊\n"])
    assert items == [DictItem(text="啊", code="a", weight=0, comment=None)]


def test_empty_source():
    assert parse_dictionary(["# nothing here\n"]) == []


@pytest.mark.parametrize(
    "lines,message",
    (
        (["text\tweight\n"], "header"),
        (["text\tcode\tcolour\n"], "unknown columns"),
        (["text\tcode\n", "# skipped\n", "你\tni\textra\n"], "broken.tsv:3"),
        (["text\tcode\n", "\tni\n"], "must not be empty"),
        (["text\tcode\tweight\n", "你\tni\theavy\n"], "not an integer"),
    ),
)
def test_malformed_dictionaries(lines, message):
    with pytest.raises(DictionaryFormatError, match=message):
        parse_dictionary(lines, source_name="broken.tsv")


def test_read_dictionary(tmp_path):
    path = tmp_path / "base.dict.tsv"
    path.write_text(SAMPLE, encoding="utf-8")
    assert len(read_dictionary(path)) == 3


def test_to_candidate():
    item = DictItem(text="泥", code="ni", weight=20, comment="mud")
    assert item.to_candidate() == Candidate(text="泥", code="ni", weight=20, comment="mud", source=CandidateSource.CODE_TABLE)
    assert item.to_candidate(CandidateSource.USER).source is CandidateSource.USER
