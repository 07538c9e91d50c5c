"""Folding-region detection for script and stylesheet text.

The scanner is lexical: it searches the raw text for delimiter strings and never
tokenizes the document, so delimiters inside string literals or other comments
are matched like any other occurrence.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from functools import partial

from .constants import (
    CLOSE_BRACE,
    EMPTY_FOLD_NAME,
    FUNCTION_KEYWORD,
    NOT_FOUND,
    OPEN_BRACE,
    REGION_NAME_CLOSERS,
    REGION_NAME_MAX,
    TRUNCATE_LOOKAHEAD,
    TRUNCATE_LOOKBACK,
)
from .models import FoldKind, FoldRegion, ScanState, detect_line_terminator

logger = logging.getLogger(__name__)

__all__ = [
    "FoldScanner",
    "detect_line_terminator",
    "generate_folds",
    "truncate_name",
]


def truncate_name(name: str, limit: int = REGION_NAME_MAX) -> str:
    """Shorten an overlong fold name, preferring to cut at a word boundary.

    Names up to `limit` characters are returned unchanged. Longer names are cut
    at the first space found from ``limit - 2`` onwards, unless there is no such
    space or it lies more than 5 characters past `limit`, in which case the name
    is cut hard at `limit`.

    Args:
        name: Trimmed fold name.
        limit: Maximum length before truncation applies.

    Returns:
        str: The (possibly) shortened name, stripped of surrounding whitespace.

    Examples:
        truncate_name("x" * 55)  # "x" * 40
        truncate_name("a" * 39 + " " + "b" * 20)  # "a" * 39
    """
    if len(name) <= limit:
        return name

    space = name.find(" ", limit - TRUNCATE_LOOKBACK)
    if space == NOT_FOUND or space > limit + TRUNCATE_LOOKAHEAD:
        space = limit
    return name[:space].strip()


def _strip_terminators(text: str) -> str:
    return text.replace("\r", "").replace("\n", "").strip()


def _iter_pairs(markers: Sequence[str], label: str) -> Iterator[tuple[str, str]]:
    """Yield usable ``(start, end)`` pairs from a flat marker sequence."""
    if len(markers) % 2:
        logger.warning("Ignoring unpaired %s marker %r", label, markers[-1])

    for index in range(0, len(markers) - 1, 2):
        start_marker, end_marker = markers[index], markers[index + 1]
        if not isinstance(start_marker, str) or not isinstance(end_marker, str):
            logger.warning("Ignoring non-string %s markers %r", label, (start_marker, end_marker))
            continue
        if not start_marker or not end_marker:
            logger.warning("Ignoring empty %s markers %r", label, (start_marker, end_marker))
            continue
        yield start_marker, end_marker


class FoldScanner:
    """Discover named regions, comments and function bodies in a document.

    Each pass walks the text backwards: it finds the last start delimiter before
    a cursor, looks forward for the first unclaimed end delimiter, emits a fold
    and then retreats the cursor to the start delimiter. Offsets used as fold
    boundaries are claimed so later matches (in the same pass or in later passes)
    cannot reuse them. Passes run in order: named regions, comments, braces.

    Not safe for concurrent use; `generate_folds` mutates the claimed offsets.

    Args:
        text: Raw document text.
        region_pairs: Flat ``[start0, end0, start1, end1, ...]`` region markers.
        comment_pairs: Flat comment markers; a pair whose start equals its end
            merges consecutive line comments instead of matching blocks.
        detect_functions: Run the brace/function pass.

    Examples:
        scanner = FoldScanner(source, comment_pairs=["/*", "*/", "//", "//"])
        folds = scanner.generate_folds()
    """

    def __init__(
        self,
        text: str,
        region_pairs: Sequence[str] | None = None,
        comment_pairs: Sequence[str] | None = None,
        detect_functions: bool = False,
    ):
        self.state = ScanState.from_document(text, region_pairs, comment_pairs, detect_functions)

    @property
    def text(self) -> str:
        return self.state.text

    @property
    def line_terminator(self) -> str:
        return self.state.line_terminator

    def generate_folds(self) -> list[FoldRegion]:
        """Run every enabled pass over the document.

        Returns:
            list[FoldRegion]: Folds in discovery order (innermost/rightmost first
                within a pass). Callers should sort before display.
        """
        self.state.claimed_offsets.clear()
        folds: list[FoldRegion] = []

        for start_marker, end_marker in _iter_pairs(self.state.region_pairs, "region"):
            self._sweep(
                partial(self.find_region, folds=folds, start_marker=start_marker, end_marker=end_marker)
            )
        for start_marker, end_marker in _iter_pairs(self.state.comment_pairs, "comment"):
            self._sweep(
                partial(self.find_comment, folds=folds, start_marker=start_marker, end_marker=end_marker)
            )
        if self.state.detect_functions:
            self._sweep(partial(self.find_brackets, folds=folds))

        logger.debug(
            "Found %d folds (%d claimed offsets)", len(folds), len(self.state.claimed_offsets)
        )
        return folds

    def _sweep(self, step: Callable[[int], int]) -> None:
        # The cursor strictly decreases on every iteration, so the walk ends
        # even when a step keeps landing on the same claimed offset.
        cursor = len(self.state.text)
        while cursor > NOT_FOUND:
            next_cursor = step(cursor)
            cursor = next_cursor if next_cursor < cursor else cursor - 1

    def find_region(
        self, cursor: int, folds: list[FoldRegion], start_marker: str, end_marker: str
    ) -> int:
        """Match one named region whose start marker lies at or before `cursor`.

        Returns:
            int: Offset of the start marker examined, or -1 when none remain.
        """
        try:
            text = self.state.text
            start = self._last_index(start_marker, cursor)
            if start == NOT_FOUND or start in self.state.claimed_offsets:
                return start

            end = self._next_unclaimed(end_marker, start)
            if end > start:
                name_end = text.find(self.state.line_terminator, start)
                if name_end == NOT_FOUND or name_end > end:
                    name_end = end
                name = text[start + len(start_marker) : name_end].strip()
                for closer in REGION_NAME_CLOSERS:
                    if closer in name:
                        name = name[: name.index(closer)]
                name = _strip_terminators(
                    name.replace(start_marker, "").replace(end_marker, "")
                )
                if len(name) > REGION_NAME_MAX:
                    name = f"{start_marker} {truncate_name(name)}"

                folds.append(self._fold(name, start, end, FoldKind.NAMED_REGION))
                self._claim(start, end)
            return start
        except Exception as error:
            logger.exception("Region scan stopped: %s", type(error).__name__)
            return NOT_FOUND

    def find_comment(
        self, cursor: int, folds: list[FoldRegion], start_marker: str, end_marker: str
    ) -> int:
        """Match one comment block, or one run of line comments, before `cursor`.

        Returns:
            int: Offset to resume the backward walk from, or -1 when done.
        """
        try:
            if start_marker == end_marker:
                return self._find_line_comments(cursor, folds, start_marker)
            return self._find_block_comment(cursor, folds, start_marker, end_marker)
        except Exception as error:
            logger.exception("Comment scan stopped: %s", type(error).__name__)
            return NOT_FOUND

    def _find_block_comment(
        self, cursor: int, folds: list[FoldRegion], start_marker: str, end_marker: str
    ) -> int:
        text = self.state.text
        start = self._last_index(start_marker, cursor)
        if start == NOT_FOUND or start in self.state.claimed_offsets:
            return start

        end = self._next_unclaimed(end_marker, start)
        if end > start:
            body_start = start + len(start_marker)
            first_close = text.find(end_marker, body_start)
            if first_close == NOT_FOUND:
                first_close = end
            name = _strip_terminators(
                text[body_start:first_close].replace(start_marker, "").replace(end_marker, "")
            )
            if len(name) > REGION_NAME_MAX:
                name = f"{start_marker} {truncate_name(name)} {end_marker}"

            folds.append(self._fold(name, start, end, FoldKind.COMMENT))
            self._claim(start, end)
        return start

    def _find_line_comments(self, cursor: int, folds: list[FoldRegion], marker: str) -> int:
        text = self.state.text
        claimed = self.state.claimed_offsets

        end = cursor
        while True:
            end = text.rfind(marker, 0, end)
            if end not in claimed:
                break
        if end == NOT_FOUND:
            return NOT_FOUND

        # Climb while the previous marker is at most one line above.
        terminator_char = self.state.line_terminator[0]
        start = end
        while True:
            previous = text.rfind(marker, 0, start)
            if previous == NOT_FOUND or previous in claimed:
                break
            if text.count(terminator_char, previous, start) > 1:
                break
            start = previous

        if start < end:
            name = _strip_terminators(text[start + len(marker) : end].replace(marker, ""))
            if len(name) > REGION_NAME_MAX:
                name = f"{marker} {truncate_name(name)}"

            # Markers sharing one physical line are not worth folding.
            if self._line_number(start) != self._line_number(end):
                folds.append(self._fold(name, start, end, FoldKind.COMMENT))
            self._claim(start, end)
        return start

    def find_brackets(self, cursor: int, folds: list[FoldRegion]) -> int:
        """Match one ``{ ... }`` body introduced by a ``function`` keyword.

        Only the brace offsets are claimed, so nested bodies sharing a
        ``function`` line can still fold independently.

        Returns:
            int: One position before the examined ``{``, or -1 when done.
        """
        try:
            start = self._last_index(OPEN_BRACE, cursor)
            if start == NOT_FOUND:
                return NOT_FOUND

            if start not in self.state.claimed_offsets:
                end = self._next_unclaimed(CLOSE_BRACE, start)
                if end > start:
                    fold = self._function_fold(start, end)
                    if fold is not None:
                        folds.append(fold)
                        self._claim(start, end)

            return start - 1 if start > 0 else start
        except Exception as error:
            logger.exception("Brace scan stopped: %s", type(error).__name__)
            return NOT_FOUND

    def _function_fold(self, start: int, end: int) -> FoldRegion | None:
        text = self.state.text
        terminator = self.state.line_terminator

        function_start = text.rfind(FUNCTION_KEYWORD, 0, start + 1)
        if function_start == NOT_FOUND:
            return None

        # Take the whole physical line so modifiers before the keyword show up.
        line_break = text.rfind(terminator, 0, function_start)
        function_start = 0 if line_break == NOT_FOUND else line_break + len(terminator)

        signature = text[function_start:start].strip()
        if signature.count(terminator[0]) > 1:
            return None

        name = _strip_terminators(signature)
        if len(name) > REGION_NAME_MAX:
            name = truncate_name(name)
            if name.endswith(OPEN_BRACE):
                name = name[: -len(OPEN_BRACE)].strip()

        return self._fold(name, function_start, end, FoldKind.MEMBER)

    def _fold(self, name: str, start: int, end: int, kind: FoldKind) -> FoldRegion:
        start_line = self._line_number(start)
        end_line = (
            self.state.text.count(self.state.line_terminator[0], start, end) + start_line + 1
        )
        return FoldRegion(name or EMPTY_FOLD_NAME, start_line, end_line, kind)

    def _line_number(self, offset: int) -> int:
        return self.state.text.count(self.state.line_terminator[0], 0, offset) + 1

    def _last_index(self, marker: str, cursor: int) -> int:
        # Occurrence must lie entirely within text[: cursor + 1].
        return self.state.text.rfind(marker, 0, cursor + 1)

    def _next_unclaimed(self, marker: str, offset: int) -> int:
        position = offset
        while True:
            position = self.state.text.find(marker, position + 1)
            if position not in self.state.claimed_offsets:
                return position

    def _claim(self, *offsets: int) -> None:
        self.state.claimed_offsets.update(offsets)


def generate_folds(
    text: str,
    region_pairs: Sequence[str] | None = None,
    comment_pairs: Sequence[str] | None = None,
    detect_functions: bool = False,
) -> list[FoldRegion]:
    """Scan `text` once and return its folding regions.

    Examples:
        generate_folds("// a\\n// b\\n", comment_pairs=["//", "//"])
    """
    return FoldScanner(text, region_pairs, comment_pairs, detect_functions).generate_folds()
