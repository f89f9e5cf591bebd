"""Request schemas and document tree models."""
from app.models.document_tree import (
    NO_BORDERS,
    Alignment,
    BorderStyle,
    CellBorders,
    DocumentTree,
    PageMargins,
    Paragraph,
    RowKind,
    Table,
    TableCell,
    TableRow,
    TextRun,
)
from app.models.schemas import (
    LocalizedBlock,
    LiturgySection,
    LiturgyRequest,
    InvalidRequestResponse,
    MethodNotAllowedResponse,
    GenerationFailedResponse,
    HealthCheckResponse,
)

__all__ = [
    # Document tree
    "NO_BORDERS",
    "Alignment",
    "BorderStyle",
    "CellBorders",
    "DocumentTree",
    "PageMargins",
    "Paragraph",
    "RowKind",
    "Table",
    "TableCell",
    "TableRow",
    "TextRun",
    # Pydantic schemas
    "LocalizedBlock",
    "LiturgySection",
    "LiturgyRequest",
    "InvalidRequestResponse",
    "MethodNotAllowedResponse",
    "GenerationFailedResponse",
    "HealthCheckResponse",
]
