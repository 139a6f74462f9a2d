import argparse
import logging
import pathlib
import sys
import typing

from .commontypes import ShuruError
from .deploy import deploy, load_matchers
from .engine import CompositionEngine
from .host import BufferTextHost
from .keys import Delete, Enter
from .matchers import MatcherManager
from .settings import Settings


def configure_logging(verbose: bool):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)


def format_candidates(candidates, limit: int):
    lines = []
    for i, candidate in enumerate(candidates[:limit], start=1):
        comment = f" ({candidate.comment})" if candidate.comment else ""
        lines.append(f"{i}. {candidate.text} [{candidate.code}]{comment}")
    return lines


class Repl:
    """Line-oriented driver for a composition engine.

    Plain text is typed key by key. A lone digit picks that candidate from the current page.
    *enter and *delete press those keys, *use ID switches formula, and *quit leaves.
    """

    def __init__(self, manager: MatcherManager, page_size: int = 8, out: typing.TextIO = sys.stdout):
        self.manager = manager
        self.page_size = page_size
        self.out = out
        self.host = BufferTextHost(on_commit=self.on_commit)
        self.engine = CompositionEngine(matcher=manager, host=self.host)

    def on_commit(self, text: str):
        print(f"committed: {text!r}", file=self.out)

    def handle_line(self, line: str) -> bool:
        line = line.strip()
        if line == "*quit":
            return False
        if line.startswith("*use"):
            formula_id = line.split(" ")[-1]
            try:
                self.manager.set_active(formula_id)
            except ShuruError as e:
                print(f"error: {e}", file=self.out)
        elif line == "*enter":
            self.engine.handle_key(Enter())
        elif line == "*delete":
            self.engine.handle_key(Delete())
        elif len(line) == 1 and line in "123456789":
            index = int(line) - 1
            if index < min(self.page_size, len(self.engine.candidates.value)):
                self.engine.select(index)
            else:
                print(f"error: no candidate {line}", file=self.out)
        elif line:
            self.engine.type_text(line)
        self.show()
        return True

    def show(self):
        state = self.engine.state
        print(f"input: {state.display_input}", file=self.out)
        for line in format_candidates(state.candidates, self.page_size):
            print(line, file=self.out)

    def run(self, prompt: str = "shuru> "):
        while True:
            try:
                line = input(prompt)
            except EOFError:
                break
            if not self.handle_line(line):
                break


deploy_parser = argparse.ArgumentParser(description="Compile every formula's dictionaries into code tables.")
deploy_parser.add_argument("settings", type=pathlib.Path)
deploy_parser.add_argument("--verbose", action="store_true")


def deploy_cli():
    args = deploy_parser.parse_args()
    configure_logging(args.verbose)
    settings = Settings.load(args.settings)
    counts = deploy(settings)
    for formula_id, count in counts.items():
        print(f"{formula_id}: {count} entries")


repl_parser = argparse.ArgumentParser(description="Type into a composition engine interactively.")
repl_parser.add_argument("settings", type=pathlib.Path)
repl_parser.add_argument("--verbose", action="store_true")


def repl_cli():
    args = repl_parser.parse_args()
    configure_logging(args.verbose)
    settings = Settings.load(args.settings)
    manager = load_matchers(settings)
    Repl(manager, page_size=settings.candidate_page_size).run()


search_parser = argparse.ArgumentParser(description="Look up candidates for a spelling.")
search_parser.add_argument("settings", type=pathlib.Path)
search_parser.add_argument("query")
search_parser.add_argument("--formula")
search_parser.add_argument("--limit", type=int)
search_parser.add_argument("--verbose", action="store_true")


def search_cli():
    args = search_parser.parse_args()
    configure_logging(args.verbose)
    settings = Settings.load(args.settings)
    manager = load_matchers(settings)
    try:
        if args.formula is not None:
            manager.set_active(args.formula)
    except ShuruError as e:
        search_parser.exit(1, f"error: {e}\n")
    limit = args.limit if args.limit is not None else settings.candidate_page_size
    for line in format_candidates(list(manager.search(args.query)), limit):
        print(line)
