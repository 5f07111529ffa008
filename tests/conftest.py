"""
Pytest configuration and fixtures for Price Sheet Generator tests.

Provides per-test Flask apps on temporary folders, sample spreadsheets
and sample image assets.
"""

import csv
import pytest
from pathlib import Path
from typing import List, Sequence
from PIL import Image
from openpyxl import Workbook
from loguru import logger

from pricesheet import create_app
from pricesheet.config import TemplateLayout


def make_app(tmp_path: Path, **overrides):
    """Create a testing app whose folders and log file live under tmp_path."""
    return create_app('testing', {
        'TESTING': True,
        'SECRET_KEY': 'test-key',
        'OUTPUT_FOLDER': str(tmp_path / 'public'),
        'IMAGES_FOLDER': str(tmp_path / 'images'),
        'UPLOAD_TEMP_FOLDER': str(tmp_path / 'uploads'),
        'LOG_FILE': str(tmp_path / 'logs' / 'app.log'),
        **overrides,
    })


@pytest.fixture
def app(tmp_path):
    """Create and configure a test Flask application."""
    app = make_app(tmp_path)

    yield app

    logger.remove(app.extensions['loguru_sink_id'])


@pytest.fixture
def client(app):
    """Create a test client for the Flask application."""
    return app.test_client()


@pytest.fixture
def layout():
    """Default card template."""
    return TemplateLayout()


@pytest.fixture
def images_dir(tmp_path):
    """Empty image asset directory."""
    path = tmp_path / 'images'
    path.mkdir(exist_ok=True)
    return path


def write_xlsx(path: Path, headers: Sequence, rows: List[Sequence], extra_sheets: Sequence[str] = ()) -> Path:
    """Write a workbook whose first sheet holds headers + rows."""
    wb = Workbook()
    ws = wb.active
    ws.title = 'Products'
    ws.append(list(headers))
    for row in rows:
        ws.append(list(row))
    for name in extra_sheets:
        extra = wb.create_sheet(name)
        extra.append(['Product', 'Price'])
        extra.append(['Should Not Load', '1.00'])
    wb.save(path)
    return path


def write_csv(path: Path, headers: Sequence, rows: List[Sequence]) -> Path:
    """Write a CSV file with headers + rows."""
    with open(path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(headers)
        writer.writerows(rows)
    return path


def make_image(path: Path, size=(300, 100), color=(255, 0, 0, 255)) -> Path:
    """Save a solid-color image."""
    mode = 'RGBA' if len(color) == 4 else 'RGB'
    img = Image.new(mode, size, color)
    if path.suffix.lower() in ('.jpg', '.jpeg'):
        img = img.convert('RGB')
    img.save(path)
    return path


@pytest.fixture
def sample_xlsx(tmp_path):
    """A full-featured product spreadsheet."""
    return write_xlsx(
        tmp_path / 'products.xlsx',
        ['Product', 'Price', 'Old Price', 'Discount Info', 'Description', 'Category'],
        [
            ['Fresh Milk', '1.99', '2.49', '-20%', '1L whole milk', 'Dairy'],
            ['Eggs', '3.50', '', '', 'Free range, 12 pcs', 'Dairy'],
            ['Sourdough Bread', '4.20', '4.80', 'Sale', '', 'Bakery'],
        ]
    )


@pytest.fixture
def four_row_csv(tmp_path):
    """Four rows, Product and Price columns only."""
    return write_csv(
        tmp_path / 'four.csv',
        ['Product', 'Price'],
        [['Apples', '1.00'], ['Pears', '1.20'], ['Plums', '2.10'], ['Grapes', '3.30']]
    )


@pytest.fixture
def two_row_csv(tmp_path):
    """Two rows, Product and Price columns only."""
    return write_csv(
        tmp_path / 'two.csv',
        ['Product', 'Price'],
        [['Apples', '1.00'], ['Pears', '1.20']]
    )
