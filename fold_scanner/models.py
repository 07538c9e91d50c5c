"""Data models for fold-scanner."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum


class FoldKind(Enum):
    """Kinds of folding regions reported to the host editor.

    Attributes:
        COMMENT: Block comment or run of consecutive line comments.
        NAMED_REGION: Explicit region delimited by a marker pair.
        MEMBER: Brace-delimited function body.
    """

    COMMENT = "comment"
    NAMED_REGION = "region"
    MEMBER = "member"


@dataclass(frozen=True)
class FoldRegion:
    """A collapsible line range discovered in a document.

    Line numbers are one-based. ``end_line`` is the line *after* the last line
    whose text belongs to the fold (the fold closes at column zero of
    ``end_line``), so a fold over lines 1-3 reports ``end_line == 4``.

    Attributes:
        name: Display text for the collapsed fold.
        start_line: Line holding the opening delimiter.
        end_line: Line after the closing delimiter's line.
        kind: What kind of delimiter produced the fold.
    """

    name: str
    start_line: int
    end_line: int
    kind: FoldKind

    @property
    def last_line(self) -> int:
        """Last physical line covered by the fold."""
        return self.end_line - 1

    @property
    def line_count(self) -> int:
        return self.last_line - self.start_line + 1

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "kind": self.kind.value,
        }


@dataclass
class ScanState:
    """Working state for one scan of a document.

    Attributes:
        text: Document text padded with two trailing line terminators.
        line_terminator: Terminator sequence detected for the document.
        claimed_offsets: Offsets already used as a fold boundary.
        region_pairs: Flat ``[start, end, ...]`` named-region markers.
        comment_pairs: Flat ``[start, end, ...]`` comment markers.
        detect_functions: Whether the brace/function pass runs.
    """

    text: str
    line_terminator: str
    claimed_offsets: set[int] = field(default_factory=set)
    region_pairs: tuple[str, ...] = ()
    comment_pairs: tuple[str, ...] = ()
    detect_functions: bool = False

    @classmethod
    def from_document(
        cls,
        text: str,
        region_pairs=None,
        comment_pairs=None,
        detect_functions: bool = False,
    ) -> ScanState:
        """Build the state for ``text``, padding it for boundary-free searches.

        Examples:
            ScanState.from_document("a {\\n}", comment_pairs=["//", "//"])
        """
        terminator = detect_line_terminator(text)
        return cls(
            text=text + terminator + terminator,
            line_terminator=terminator,
            region_pairs=tuple(region_pairs or ()),
            comment_pairs=tuple(comment_pairs or ()),
            detect_functions=detect_functions,
        )


def detect_line_terminator(text: str) -> str:
    """Pick the line terminator used by a document.

    Args:
        text: Raw document text.

    Returns:
        str: ``"\\r\\n"`` when both characters occur anywhere, the single
            character when only one does, otherwise ``os.linesep``.

    Examples:
        detect_line_terminator("a\\r\\nb")  # "\\r\\n"
        detect_line_terminator("a\\nb")  # "\\n"
    """
    terminator = ""
    if "\r" in text:
        terminator += "\r"
    if "\n" in text:
        terminator += "\n"
    return terminator or os.linesep
