import dataclasses
import json
import pathlib
import typing

import cattrs

from .commontypes import UnknownFormulaError

settings_converter = cattrs.Converter()
settings_converter.register_unstructure_hook(pathlib.Path, str)
settings_converter.register_structure_hook(pathlib.Path, lambda v, _: pathlib.Path(v))


@dataclasses.dataclass(kw_only=True)
class Formula:
    id: str
    name: typing.Optional[str] = None
    dictionaries: list[str] = dataclasses.field(default_factory=list)

    @property
    def display_name(self):
        return self.name if self.name is not None else self.id


@dataclasses.dataclass(kw_only=True)
class Settings:
    _path: pathlib.Path
    formulas: list[Formula]
    active_formula: str
    config_dir: pathlib.Path
    target_dir: pathlib.Path
    candidate_page_size: int = 8

    def resolve(self, path: pathlib.Path):
        "Relative paths in the settings file are relative to the file's own directory."
        if path.is_absolute():
            return path
        return self._path.parent / path

    def formula(self, formula_id: str) -> Formula:
        for formula in self.formulas:
            if formula.id == formula_id:
                return formula
        raise UnknownFormulaError(formula_id)

    def dictionary_paths(self, formula: Formula) -> list[pathlib.Path]:
        source_dir = self.resolve(self.config_dir) / formula.id
        return [source_dir / name for name in formula.dictionaries]

    def database_path(self, formula: Formula) -> pathlib.Path:
        return self.resolve(self.target_dir) / f"{formula.id}.db3"

    def set_active_formula(self, formula_id: str):
        self.active_formula = self.formula(formula_id).id

    def save(self, dest: typing.Optional[pathlib.Path] = None):
        if dest is None:
            dest = self._path
        raw = settings_converter.unstructure(self)
        del raw["_path"]
        with dest.open("w", encoding="utf-8") as f:
            json.dump(raw, f, indent=2, ensure_ascii=False)

    @classmethod
    def load(cls, src: pathlib.Path):
        with src.open(encoding="utf-8") as f:
            raw = json.load(f)
        raw["_path"] = src
        return settings_converter.structure(raw, cls)

    @classmethod
    def for_test(cls):
        return settings_converter.structure(
            {
                "_path": "test.settings.json",
                "formulas": [
                    {"id": "pinyin", "name": "拼音", "dictionaries": ["base.dict.tsv", "extra.dict.tsv"]},
                ],
                "active_formula": "pinyin",
                "config_dir": "test_config",
                "target_dir": "test_target",
                "candidate_page_size": 8,
            },
            cls,
        )


settings_converter.register_structure_hook(Settings, cattrs.gen.make_dict_structure_fn(Settings, settings_converter))
