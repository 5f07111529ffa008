"""
Configuration management for the Price Sheet Generator
Loads settings from YAML files with environment variable overrides
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError
from loguru import logger

from .errors import ConfigurationError


class TextElement(BaseModel):
    """One fixed-position text field on a card. `y` is the text baseline."""
    model_config = ConfigDict(frozen=True)

    field: str
    x: int
    y: int
    size: int
    color: str = "black"
    bold: bool = False
    strikethrough: bool = False


def _default_text_elements() -> Tuple[TextElement, ...]:
    return (
        TextElement(field="product", x=20, y=50, size=40, color="black", bold=True),
        TextElement(field="description", x=20, y=90, size=20, color="black"),
        TextElement(field="discount_info", x=600, y=50, size=30, color="red"),
        TextElement(field="price", x=600, y=100, size=40, color="black", bold=True),
        TextElement(field="old_price", x=600, y=140, size=20, color="gray", strikethrough=True),
    )


class TemplateLayout(BaseModel):
    """Card template and grid layout, shared by the renderer and compositor"""
    model_config = ConfigDict(frozen=True)

    card_width: int = Field(default=800, gt=0)
    card_height: int = Field(default=200, gt=0)
    columns: int = Field(default=3, gt=0)
    canvas_color: Tuple[int, int, int] = (255, 255, 255)

    # Assets
    background_filename: str = "background.png"
    image_extensions: Tuple[str, ...] = (".png", ".jpg", ".jpeg", ".webp")

    # Product photo slot
    product_image_box: Tuple[int, int] = (150, 150)
    product_image_offset: Tuple[int, int] = (400, 20)

    # Text overlay
    text_elements: Tuple[TextElement, ...] = Field(default_factory=_default_text_elements)
    font_candidates: Tuple[str, ...] = ("arial.ttf", "Arial.ttf", "DejaVuSans.ttf", "LiberationSans-Regular.ttf")
    bold_font_candidates: Tuple[str, ...] = ("arialbd.ttf", "Arial Bold.ttf", "DejaVuSans-Bold.ttf", "LiberationSans-Bold.ttf")

    @property
    def card_size(self) -> Tuple[int, int]:
        return (self.card_width, self.card_height)


class AppConfig(BaseModel):
    """Main application configuration"""

    # Flask settings
    SECRET_KEY: str = Field(default_factory=lambda: os.urandom(24).hex())
    FLASK_ENV: str = "development"
    DEBUG: bool = True
    TESTING: bool = False

    # Paths
    OUTPUT_FOLDER: str = "public"
    IMAGES_FOLDER: str = "images"
    UPLOAD_TEMP_FOLDER: str = "uploads"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/app.log"

    # Upload
    UPLOAD_FIELD: str = "file"
    MAX_UPLOAD_SIZE: int = 20 * 1024 * 1024  # 20MB

    # Output
    PNG_FILENAME: str = "price-sheet.png"
    PDF_FILENAME: str = "price-sheet.pdf"
    RENDER_WORKERS: int = Field(default=1, ge=1)

    LAYOUT: TemplateLayout = Field(default_factory=TemplateLayout)


def load_yaml_config(file_path: str) -> Dict:
    """Load configuration from YAML file"""
    path = Path(file_path)
    if not path.exists():
        logger.debug(f"Config file not found: {file_path}")
        return {}

    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error loading config file {file_path}: {e}",
                                 details={'path': file_path})


def load_config(environment: str = "development", overrides: Optional[Dict] = None) -> AppConfig:
    """Load configuration with environment-specific overrides"""

    # Load base settings
    base_config = load_yaml_config("config/settings.yaml")

    # Load environment-specific settings
    env_config = load_yaml_config(f"config/settings_{environment}.yaml")

    # Merge configurations (env overrides base)
    config_dict = {**base_config, **env_config}

    # Apply environment variable overrides
    env_overrides = {
        'FLASK_ENV': os.getenv('FLASK_ENV', environment),
        'LOG_LEVEL': os.getenv('LOG_LEVEL'),
        'SECRET_KEY': os.getenv('SECRET_KEY'),
        'OUTPUT_FOLDER': os.getenv('OUTPUT_FOLDER'),
        'IMAGES_FOLDER': os.getenv('IMAGES_FOLDER'),
        'UPLOAD_TEMP_FOLDER': os.getenv('UPLOAD_TEMP_FOLDER'),
    }

    # Only include non-None values
    env_overrides = {k: v for k, v in env_overrides.items() if v is not None}
    config_dict.update(env_overrides)

    # Special handling for boolean DEBUG flag
    if 'FLASK_ENV' in config_dict:
        config_dict['DEBUG'] = config_dict['FLASK_ENV'] == 'development'

    if overrides:
        config_dict.update(overrides)

    try:
        return AppConfig(**config_dict)
    except PydanticValidationError as e:
        logger.error(f"Configuration validation error: {e}")
        raise ConfigurationError("Invalid configuration",
                                 details={'errors': str(e)},
                                 suggestions=["Check config/settings.yaml and environment variables"])
