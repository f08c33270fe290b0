"""Completion bridge between an interactive prompt and a host completion engine.

The bridge holds no completion logic of its own. It asks an engine for the
candidates of the token under the cursor and turns them back into full input
lines.
"""

import rlcompleter
from typing import Any, Callable

CompletionEngine = Callable[[str], list[str]]


def python_completions(namespace: dict[str, Any] | None = None) -> CompletionEngine:
    """Build an engine backed by the standard library's rlcompleter.

    Args:
        namespace: Names visible to completion; defaults to an empty namespace
                   (builtins and keywords only)

    Returns:
        Callable mapping a partial token to its candidate completions
    """
    completer = rlcompleter.Completer(dict(namespace or {}))

    def engine(text: str) -> list[str]:
        if not text.strip():
            return []
        candidates = []
        state = 0
        while True:
            candidate = completer.complete(text, state)
            if candidate is None:
                break
            candidates.append(candidate)
            state += 1
        return candidates

    return engine


class CompletionBridge:
    """Forwards partial input lines to a completion engine.

    Example:
        >>> bridge = CompletionBridge(python_completions({"os": __import__("os")}))
        >>> lines = bridge.complete("(str (os.getc", "os.getc")
        >>> # every candidate keeps the "(str (" prefix
    """

    def __init__(self, engine: CompletionEngine | None = None):
        self.engine = engine or python_completions()

    def complete(self, line: str, match: str) -> list[str]:
        """Complete the trailing match of line.

        Args:
            line: Full input line typed so far
            match: Suffix of line being completed

        Returns:
            Full candidate lines, each being line with match replaced by a
            non-empty engine candidate
        """
        line_without_match = line[:len(line) - len(match)]
        return [
            f"{line_without_match}{candidate}"
            for candidate in self.engine(match)
            if candidate != ""
        ]
