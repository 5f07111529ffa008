"""
Output writers for the Price Sheet Generator.

The grid is saved as a PNG, then the same PNG is placed on a single PDF
page of identical size (one pixel per point). Both files live at fixed
names in the output folder and are overwritten on every run.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from PIL import Image
from loguru import logger
from reportlab.pdfgen import canvas

from .errors import UnwritableOutputError


@dataclass
class ExportResult:
    """Paths and size of the files written for one price sheet"""
    png_path: Path
    pdf_path: Path
    size: Tuple[int, int]


def export_png(grid: Image.Image, path: Path) -> Path:
    """Write the grid image as PNG"""
    path = Path(path)
    try:
        grid.save(path, format='PNG')
    except OSError as e:
        raise UnwritableOutputError(str(path), str(e))

    logger.info(f"Wrote PNG: {path} ({grid.width}x{grid.height})")
    return path


def export_pdf(png_path: Path, size: Tuple[int, int], path: Path) -> Path:
    """Write a one-page PDF sized to `size` showing the PNG edge to edge"""
    path = Path(path)
    width, height = size

    try:
        pdf = canvas.Canvas(str(path), pagesize=(width, height))
        pdf.drawImage(str(png_path), 0, 0, width=width, height=height)
        pdf.showPage()
        pdf.save()
    except OSError as e:
        raise UnwritableOutputError(str(path), str(e))

    logger.info(f"Wrote PDF: {path} ({width}x{height} pt)")
    return path


def export_price_sheet(grid: Image.Image,
                       output_dir: Path,
                       png_name: str = "price-sheet.png",
                       pdf_name: str = "price-sheet.pdf") -> ExportResult:
    """Write the PNG, then the PDF built from it"""
    output_dir = Path(output_dir)
    png_path = export_png(grid, output_dir / png_name)
    pdf_path = export_pdf(png_path, grid.size, output_dir / pdf_name)
    return ExportResult(png_path=png_path, pdf_path=pdf_path, size=grid.size)
