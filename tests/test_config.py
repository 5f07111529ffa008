"""
Unit tests for configuration loading.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from pricesheet.config import AppConfig, TemplateLayout, load_config
from pricesheet.errors import ConfigurationError


class TestTemplateLayout:
    """Test the card template defaults."""

    def test_defaults(self):
        """Test the fixed card geometry."""
        layout = TemplateLayout()

        assert layout.card_size == (800, 200)
        assert layout.columns == 3
        assert layout.product_image_box == (150, 150)
        assert layout.product_image_offset == (400, 20)
        assert layout.image_extensions == ('.png', '.jpg', '.jpeg', '.webp')
        assert layout.background_filename == 'background.png'

    def test_text_elements(self):
        """Test the five text fields and their styling."""
        elements = {e.field: e for e in TemplateLayout().text_elements}

        assert list(elements) == ['product', 'description', 'discount_info', 'price', 'old_price']
        assert (elements['product'].x, elements['product'].y, elements['product'].size) == (20, 50, 40)
        assert elements['product'].bold
        assert elements['discount_info'].color == 'red'
        assert elements['price'].bold
        assert elements['old_price'].strikethrough
        assert elements['old_price'].color == 'gray'

    def test_immutable(self):
        """Test that layouts cannot be changed in place."""
        layout = TemplateLayout()

        with pytest.raises(PydanticValidationError):
            layout.columns = 4

    def test_columns_must_be_positive(self):
        with pytest.raises(PydanticValidationError):
            TemplateLayout(columns=0)


class TestLoadConfig:
    """Test merging settings sources."""

    def test_overrides_applied(self, tmp_path):
        config = load_config('testing', {'OUTPUT_FOLDER': str(tmp_path), 'RENDER_WORKERS': 2})

        assert config.OUTPUT_FOLDER == str(tmp_path)
        assert config.RENDER_WORKERS == 2

    def test_nested_layout_override(self):
        config = load_config('testing', {'LAYOUT': {'columns': 4}})

        assert isinstance(config.LAYOUT, TemplateLayout)
        assert config.LAYOUT.columns == 4
        assert config.LAYOUT.card_width == 800

    def test_environment_variable_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv('IMAGES_FOLDER', str(tmp_path / 'assets'))

        config = load_config('testing')

        assert config.IMAGES_FOLDER == str(tmp_path / 'assets')

    def test_invalid_value_raises(self):
        with pytest.raises(ConfigurationError):
            load_config('testing', {'RENDER_WORKERS': 0})

    def test_defaults(self):
        config = AppConfig()

        assert config.PNG_FILENAME == 'price-sheet.png'
        assert config.PDF_FILENAME == 'price-sheet.pdf'
        assert config.UPLOAD_FIELD == 'file'
