"""
Spreadsheet loading for the Price Sheet Generator
Converts the first sheet of an uploaded workbook into product records
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

import pandas as pd
from loguru import logger

from .errors import LoadError, EmptySpreadsheetError


CSV_SEPARATORS = {
    '.csv': ',',
    '.tsv': '\t',
    '.tab': '\t',
}

EXCEL_SUFFIXES = ('.xlsx', '.xlsm', '.xltx', '.xltm', '.xls', '.ods')

SUPPORTED_SUFFIXES = tuple(CSV_SEPARATORS) + EXCEL_SUFFIXES

_WHITESPACE = re.compile(r'\s+')


@dataclass
class ProductRecord:
    """One spreadsheet row, ready for card rendering"""
    product: str
    price: str
    old_price: str = ""
    discount_info: str = ""
    description: str = ""
    category: str = ""  # carried through, not rendered

    @classmethod
    def from_row(cls, row: Dict[str, str]) -> 'ProductRecord':
        """Build a record from a row dict keyed by trimmed column header.

        Missing or empty cells fall back to placeholder text for
        Product/Price and to an empty string for everything else. The
        placeholder is picked before trimming, so a whitespace-only
        Product cell renders as an empty name. Price columns lose all
        whitespace, placeholder included ("1 299" -> "1299",
        "No Price" -> "NoPrice").
        """
        return cls(
            product=_field(row, 'Product', 'No Product'),
            price=_WHITESPACE.sub('', _field(row, 'Price', 'No Price')),
            old_price=_WHITESPACE.sub('', _field(row, 'Old Price')),
            discount_info=_field(row, 'Discount Info'),
            description=_field(row, 'Description'),
            category=_field(row, 'Category'),
        )


def _is_empty(value) -> bool:
    return value is None or pd.isna(value) or str(value) == ""


def _field(row: Dict[str, str], key: str, default: str = "") -> str:
    value = row.get(key)
    if _is_empty(value):
        return default
    return str(value).strip()


def read_sheet(path: Path) -> pd.DataFrame:
    """Read the first sheet of a spreadsheet as text cells"""
    suffix = path.suffix.lower()

    try:
        if suffix in CSV_SEPARATORS:
            return pd.read_csv(path, sep=CSV_SEPARATORS[suffix], dtype=str,
                               keep_default_na=False, skip_blank_lines=True)

        workbook = pd.ExcelFile(path)
    except pd.errors.EmptyDataError:
        raise EmptySpreadsheetError(str(path))
    except Exception as e:
        raise LoadError(f"Could not read spreadsheet: {path.name}",
                        details={'path': str(path), 'reason': str(e)},
                        suggestions=["Upload a .xlsx or .csv file",
                                     "Check that the file is not corrupted or password protected"])

    with workbook:
        if not workbook.sheet_names:
            raise LoadError(f"Spreadsheet has no sheets: {path.name}",
                            details={'path': str(path)})

        sheet_name = workbook.sheet_names[0]
        if len(workbook.sheet_names) > 1:
            logger.debug(f"Using first sheet '{sheet_name}', ignoring {len(workbook.sheet_names) - 1} more")

        try:
            return workbook.parse(sheet_name, dtype=str, keep_default_na=False)
        except Exception as e:
            raise LoadError(f"Could not read sheet '{sheet_name}' of {path.name}",
                            details={'path': str(path), 'sheet_name': sheet_name, 'reason': str(e)})


def clean_rows(frame: pd.DataFrame) -> List[Dict[str, str]]:
    """
    Convert sheet rows to dicts keyed by trimmed column header.

    Cell values are kept as read, empty cells are left out and rows whose
    cells are all blank are skipped. When two headers trim to the same key
    the right-most column wins.
    """
    rows = []
    for values in frame.itertuples(index=False, name=None):
        row = {}
        for header, value in zip(frame.columns, values):
            if not _is_empty(value):
                row[str(header).strip()] = str(value)
        if any(text.strip() for text in row.values()):
            rows.append(row)
    return rows


def read_rows(path) -> List[Dict[str, str]]:
    """Read and clean the rows of the first sheet"""
    path = Path(path)
    rows = clean_rows(read_sheet(path))
    logger.debug(f"Cleaned rows from {path.name}: {rows}")
    return rows


def load_products(path) -> List[ProductRecord]:
    """Load product records from a spreadsheet, preserving row order"""
    path = Path(path)
    rows = read_rows(path)

    if not rows:
        raise EmptySpreadsheetError(str(path))

    products = [ProductRecord.from_row(row) for row in rows]
    logger.info(f"Loaded {len(products)} products from {path.name}")
    return products
