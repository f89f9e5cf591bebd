"""
Abstract document tree produced by the composer and consumed by the DOCX writer.

All nodes are frozen dataclasses holding tuples, so a composed tree can be
compared for equality and shared freely. Sizes are in points; widths and
margins are in twips (1/1440 inch), matching the OOXML units the writer emits.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Tuple, Union


class Alignment(str, enum.Enum):
    LEFT = "left"
    CENTER = "center"


class BorderStyle(str, enum.Enum):
    NONE = "none"
    SINGLE = "single"


class RowKind(str, enum.Enum):
    """Which part of a section a table row carries."""

    REFERENCE = "reference"
    TEXT = "text"


@dataclass(frozen=True)
class CellBorders:
    """Border applied to all four edges of a table cell."""

    style: BorderStyle = BorderStyle.NONE
    size: int = 0


NO_BORDERS = CellBorders()


@dataclass(frozen=True)
class TextRun:
    """A span of uniformly formatted text.

    ``break_after`` places an inline line break (not a paragraph break)
    directly after the text.
    """

    text: str = ""
    bold: bool = False
    italic: bool = False
    size: float | None = None
    break_after: bool = False


@dataclass(frozen=True)
class Paragraph:
    runs: Tuple[TextRun, ...] = ()
    alignment: Alignment = Alignment.LEFT
    space_before: float | None = None
    space_after: float | None = None

    @property
    def text(self) -> str:
        """Visible text with inline breaks rendered as newlines."""
        parts = []
        for run in self.runs:
            parts.append(run.text)
            if run.break_after:
                parts.append("\n")
        return "".join(parts)

    @property
    def line_break_count(self) -> int:
        return sum(1 for run in self.runs if run.break_after)


@dataclass(frozen=True)
class TableCell:
    paragraphs: Tuple[Paragraph, ...]
    width_pct: int = 50
    borders: CellBorders = NO_BORDERS


@dataclass(frozen=True)
class TableRow:
    kind: RowKind
    cells: Tuple[TableCell, TableCell]


@dataclass(frozen=True)
class Table:
    rows: Tuple[TableRow, ...]
    column_widths: Tuple[int, ...] = (4680, 4680)
    width_pct: int = 100


Block = Union[Paragraph, Table]


@dataclass(frozen=True)
class PageMargins:
    top: int = 1440
    right: int = 1440
    bottom: int = 1440
    left: int = 1440


@dataclass(frozen=True)
class DocumentTree:
    """Ordered block content plus document-wide formatting."""

    blocks: Tuple[Block, ...]
    body_font: str = "Times New Roman"
    body_size: float = 12
    margins: PageMargins = field(default_factory=PageMargins)

    @property
    def tables(self) -> Tuple[Table, ...]:
        return tuple(b for b in self.blocks if isinstance(b, Table))

    @property
    def paragraphs(self) -> Tuple[Paragraph, ...]:
        """Top-level paragraphs only (headings, title, subtitle)."""
        return tuple(b for b in self.blocks if isinstance(b, Paragraph))
