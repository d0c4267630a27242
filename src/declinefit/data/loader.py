"""Load production data files from disk."""

from datetime import date, datetime
import logging
from pathlib import Path

import pandas as pd

from ..errors import ParseError
from .parser import ParsedProduction, parse_production

logger = logging.getLogger(__name__)

EXCEL_SUFFIXES = ('.xlsx',)


def _format_cell(value) -> str:
    """Render a spreadsheet cell as parser-ready text."""
    if pd.isna(value):
        return ""
    if isinstance(value, (pd.Timestamp, datetime, date)):
        return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
    return str(value).strip()


def _excel_to_text(filepath: Path) -> str:
    """Convert the first two columns of a workbook's first sheet to text.

    Args:
        filepath: Path to .xlsx file

    Returns:
        One ``date,rate`` line per spreadsheet row

    Raises:
        ParseError: If the sheet has fewer than two columns
    """
    df = pd.read_excel(filepath, header=None)
    if df.shape[1] < 2:
        raise ParseError(
            f"Expected a date column and a rate column in {filepath.name}, "
            f"found {df.shape[1]} column(s)"
        )

    lines = [
        f"{_format_cell(row[0])},{_format_cell(row[1])}"
        for row in df.iloc[:, :2].itertuples(index=False, name=None)
    ]
    return "\n".join(lines)


def read_production_file(filepath: Path | str) -> ParsedProduction:
    """Load and parse a production file.

    .xlsx workbooks are read with pandas; anything else is read as UTF-8
    text. Both go through the same parser rules.

    Args:
        filepath: Path to CSV/TXT or .xlsx file

    Returns:
        ParsedProduction series

    Raises:
        FileNotFoundError: If the file does not exist
        ParseError: If no valid records are found
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Production file not found: {filepath}")

    if filepath.suffix.lower() in EXCEL_SUFFIXES:
        text = _excel_to_text(filepath)
    else:
        text = filepath.read_text(encoding="utf-8")

    parsed = parse_production(text)
    logger.info(f"Loaded {parsed.n_records} records from {filepath}")
    return parsed
