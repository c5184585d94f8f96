# tagorder/core/services.py
"""
Selection and confirmation services for the arrange command.
Preset* return scripted answers (CLI flags, tests); Console* prompt on stdin.
Returning None means the user cancelled.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Sequence, TypeVar

from tagorder.core.geometry import as_point3
from tagorder.core.log import get_logger
from tagorder.core.types import Point3

E = TypeVar("E", bound=Enum)

_CANCEL_WORDS = ("q", "quit", "cancel", "esc")


def parse_point(text: str) -> Point3:
    """Parse 'x,y' or 'x,y,z' (spaces allowed). Raises ValueError."""
    parts = [p for p in text.replace(";", ",").split(",") if p.strip()]
    return as_point3(float(p) for p in parts)


class PresetSelection:
    """Selection with fixed answers."""

    def __init__(
        self,
        label_ids: list[str] | None,
        origin: Point3 | None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._label_ids = label_ids
        self._origin = origin
        self._log = get_logger(__name__, logger)

    def pick_point(self, prompt: str) -> Point3 | None:
        return self._origin

    def pick_many(self, accept: Callable[[str], bool], prompt: str) -> list[str] | None:
        if self._label_ids is None:
            return None
        picked = [i for i in self._label_ids if accept(i)]
        rejected = [i for i in self._label_ids if i not in picked]
        if rejected:
            self._log.warning("Ignored %d non-tag element(s): %s", len(rejected), rejected)
        return picked


class PresetConfirmation:
    """Answers choices by option type, e.g. {SortAxis: SortAxis.VERTICAL}."""

    def __init__(self, answers: dict[type, Enum] | None = None, use_defaults: bool = True) -> None:
        self._answers = dict(answers or {})
        self._use_defaults = use_defaults

    def choose(self, title: str, options: Sequence[E], default: E | None = None) -> E | None:
        if not options:
            return None
        answer = self._answers.get(type(options[0]))
        if answer is not None:
            return answer if answer in options else None
        return default if self._use_defaults else None


class ConsoleSelection:
    """Prompts for tag ids and the start point. Blank input or EOF cancels."""

    def __init__(
        self,
        available: list[str],
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        max_tries: int = 3,
    ) -> None:
        self._available = list(available)
        self._input = input_fn
        self._output = output_fn
        self._max_tries = max_tries

    def _ask(self, prompt: str) -> str | None:
        try:
            text = self._input(prompt).strip()
        except EOFError:
            return None
        if not text or text.lower() in _CANCEL_WORDS:
            return None
        return text

    def pick_point(self, prompt: str) -> Point3 | None:
        for _ in range(self._max_tries):
            text = self._ask(f"{prompt} (x,y): ")
            if text is None:
                return None
            try:
                return parse_point(text)
            except ValueError:
                self._output(f"Not a point: {text!r}")
        return None

    def pick_many(self, accept: Callable[[str], bool], prompt: str) -> list[str] | None:
        candidates = [i for i in self._available if accept(i)]
        self._output(f"Tags: {', '.join(candidates)}")
        text = self._ask(f"{prompt} (comma-separated ids, * for all): ")
        if text is None:
            return None
        if text == "*":
            return candidates
        wanted = [t.strip() for t in text.split(",") if t.strip()]
        unknown = [t for t in wanted if t not in candidates]
        if unknown:
            self._output(f"Not tags, ignored: {', '.join(unknown)}")
        return [t for t in wanted if t in candidates]


class ConsoleConfirmation:
    """Numbered menu on stdin. Blank input picks the default; EOF or 'q' cancels."""

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        self._input = input_fn
        self._output = output_fn

    def choose(self, title: str, options: Sequence[E], default: E | None = None) -> E | None:
        self._output(title)
        for i, opt in enumerate(options, start=1):
            marker = " (default)" if opt is default else ""
            self._output(f"  {i}. {opt.value}{marker}")
        try:
            text = self._input("> ").strip().lower()
        except EOFError:
            return None
        if text in _CANCEL_WORDS:
            return None
        if not text:
            return default
        if text.isdigit() and 1 <= int(text) <= len(options):
            return options[int(text) - 1]
        for opt in options:
            if text == str(opt.value).lower() or text == opt.name.lower():
                return opt
        self._output(f"Unknown choice: {text!r}")
        return None
