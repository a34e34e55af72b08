"""Export sinks: spreadsheet and image-based PDF files."""

from pathlib import Path
from typing import Iterable, Sequence

import pandas as pd
from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure

from myexpense.domain.export import EXPORT_HEADER, ExportRow, rows_as_table
from myexpense.logging_setup import get_logger

logger = get_logger(__name__)

SHEET_NAME = "Transactions"


def rows_to_frame(rows: Sequence[ExportRow]) -> pd.DataFrame:
    """Build a DataFrame with one column per table column."""
    table = rows_as_table(list(rows))
    return pd.DataFrame(table[1:], columns=EXPORT_HEADER)


def write_spreadsheet(rows: Sequence[ExportRow], path: Path) -> Path:
    """Write rows (header plus data) to a single-sheet .xlsx file.

    Args:
        rows: Rows in display order.
        path: Output file path.

    Returns:
        The written path.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    rows_to_frame(rows).to_excel(path, sheet_name=SHEET_NAME, index=False, engine="openpyxl")
    logger.info("Wrote %d rows to %s", len(rows), path)
    return path


def write_pdf(figures: Iterable[Figure], path: Path) -> Path:
    """Write each figure as one page of a PDF document.

    Args:
        figures: Rendered views, in page order.
        path: Output file path.

    Returns:
        The written path.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    pages = 0
    with PdfPages(path) as pdf:
        for fig in figures:
            pdf.savefig(fig)
            pages += 1
    logger.info("Wrote %d page(s) to %s", pages, path)
    return path
