"""
Price Sheet Generator - Flask Application Factory
Turns a product spreadsheet into a grid of price cards (PNG + PDF)
"""

import os
from pathlib import Path
from flask import Flask
from loguru import logger
from dotenv import load_dotenv

from .config import load_config


def create_app(config_name=None, overrides=None):
    """Flask application factory"""

    # Load environment variables
    load_dotenv()

    environment = config_name or os.getenv('FLASK_ENV', 'development')

    # Generated files and images are served by our own route
    app = Flask(__name__, static_folder=None)

    # Load configuration
    config = load_config(environment, overrides)
    app.config.update(config.model_dump())
    app.config['LAYOUT'] = config.LAYOUT
    app.config['MAX_CONTENT_LENGTH'] = config.MAX_UPLOAD_SIZE

    # Configure logging
    app.extensions['loguru_sink_id'] = setup_logging(app)

    # Ensure upload directories exist
    setup_directories(app)

    # Register blueprints
    from . import routes
    app.register_blueprint(routes.bp)

    logger.info(f"Price Sheet Generator initialized in {environment} mode")

    return app


def setup_logging(app):
    """Configure loguru logging, returning the id of the added file sink"""
    log_level = app.config.get('LOG_LEVEL', 'INFO')
    log_file = app.config.get('LOG_FILE', 'logs/app.log')

    # Ensure logs directory exists
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    return logger.add(
        log_file,
        rotation="1 day",
        retention="30 days",
        level=log_level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} | {message}"
    )


def setup_directories(app):
    """Ensure required directories exist"""
    dirs = [
        app.config['OUTPUT_FOLDER'],
        app.config['IMAGES_FOLDER'],
        app.config['UPLOAD_TEMP_FOLDER'],
    ]

    for dir_path in dirs:
        Path(dir_path).mkdir(parents=True, exist_ok=True)
