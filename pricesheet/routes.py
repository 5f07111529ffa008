"""
Flask routes for the Price Sheet Generator
Handles the spreadsheet upload and serves the generated files
"""

import uuid
from pathlib import Path
from typing import List

from flask import Blueprint, abort, current_app, jsonify, render_template, request, send_from_directory
from werkzeug.datastructures import FileStorage
from werkzeug.exceptions import HTTPException
from loguru import logger

from .config import TemplateLayout
from .errors import ValidationError, ProcessingError, NoFileUploadedError, UnwritableOutputError
from .export import ExportResult, export_price_sheet
from .layout import compose_grid
from .render import render_cards
from .table import SUPPORTED_SUFFIXES, ProductRecord, load_products


bp = Blueprint('main', __name__)


@bp.route('/', methods=['GET'])
def index():
    """Render upload form"""
    return render_template('index.html', field_name=current_app.config['UPLOAD_FIELD'])


@bp.route('/upload', methods=['POST'])
def upload():
    """Generate the price sheet PNG and PDF from an uploaded spreadsheet"""
    field_name = current_app.config['UPLOAD_FIELD']

    try:
        upload_file = request.files.get(field_name)
        if upload_file is None or not upload_file.filename:
            raise NoFileUploadedError(field_name)

        upload_path = save_upload(upload_file, Path(current_app.config['UPLOAD_TEMP_FOLDER']))
        logger.info(f"Upload received: {upload_file.filename} -> {upload_path.name}")

        try:
            products = load_products(upload_path)
        finally:
            cleanup_upload(upload_path)

        result = process_price_sheet(
            products=products,
            images_dir=Path(current_app.config['IMAGES_FOLDER']),
            output_dir=Path(current_app.config['OUTPUT_FOLDER']),
            layout=current_app.config['LAYOUT'],
            png_name=current_app.config['PNG_FILENAME'],
            pdf_name=current_app.config['PDF_FILENAME'],
            workers=current_app.config['RENDER_WORKERS']
        )

    except ValidationError as e:
        logger.warning(f"Rejected upload: {e}")
        return e.message, 400, {'Content-Type': 'text/plain; charset=utf-8'}

    except ProcessingError as e:
        logger.error(f"Price sheet generation failed: {e}")
        return jsonify(e.to_dict()), 500

    except HTTPException:
        raise

    except Exception as e:
        logger.exception(f"Unexpected error generating price sheet: {e}")
        return jsonify({
            'error_type': type(e).__name__,
            'message': 'Failed to generate price sheet',
            'details': {},
            'suggestions': []
        }), 500

    return jsonify({
        'message': 'Price sheet generated successfully!',
        'imageUrl': f"/{result.png_path.name}",
        'pdfUrl': f"/{result.pdf_path.name}"
    })


def save_upload(file: FileStorage, upload_dir: Path) -> Path:
    """Store an uploaded file under a unique name, keeping a known spreadsheet extension"""
    suffix = Path(file.filename).suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        suffix = ""
    upload_path = upload_dir / f"{uuid.uuid4().hex}{suffix}"

    try:
        upload_dir.mkdir(parents=True, exist_ok=True)
        file.save(upload_path)
    except OSError as e:
        raise ProcessingError(f"Failed to save upload: {e}",
                              details={'path': str(upload_path)})

    return upload_path


def cleanup_upload(upload_path: Path):
    """Delete a stored upload; failures are only logged"""
    try:
        upload_path.unlink(missing_ok=True)
        logger.debug(f"Removed upload: {upload_path}")
    except OSError as e:
        logger.warning(f"Failed to remove upload {upload_path}: {e}")


def process_price_sheet(products: List[ProductRecord],
                        images_dir: Path,
                        output_dir: Path,
                        layout: TemplateLayout,
                        png_name: str = "price-sheet.png",
                        pdf_name: str = "price-sheet.pdf",
                        workers: int = 1) -> ExportResult:
    """
    Main processing function
    Render cards -> Compose grid -> Export PNG and PDF
    """
    cards = render_cards(products, images_dir, layout, workers=workers)
    grid = compose_grid(cards, layout)

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise UnwritableOutputError(str(output_dir), str(e))

    result = export_price_sheet(grid, output_dir, png_name, pdf_name)
    logger.info(f"Price sheet ready: {len(products)} products, {result.size[0]}x{result.size[1]}")
    return result


@bp.route('/<path:filename>', methods=['GET'])
def serve_file(filename):
    """Serve generated output first, then source images"""
    for folder_key in ('OUTPUT_FOLDER', 'IMAGES_FOLDER'):
        folder = Path(current_app.config[folder_key]).resolve()
        if (folder / filename).is_file():
            return send_from_directory(folder, filename)

    abort(404)
