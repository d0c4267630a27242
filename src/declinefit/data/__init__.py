"""Production data parsing and file loading."""

from .parser import ProductionRecord, ParsedProduction, parse_production, parse_date
from .loader import read_production_file

__all__ = [
    "ProductionRecord",
    "ParsedProduction",
    "parse_production",
    "parse_date",
    "read_production_file",
]
