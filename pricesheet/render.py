"""
Card rendering module for the Price Sheet Generator.

This module handles:
- Resolving fonts for the fixed text template
- Fitting product photos into their slot
- Drawing the text overlay (name, description, discount, price, old price)
- Flattening all layers onto a white card
"""

from concurrent.futures import ThreadPoolExecutor
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont, ImageOps
from loguru import logger

from .assets import find_product_image, load_background, open_image
from .config import TemplateLayout, TextElement
from .table import ProductRecord


@lru_cache(maxsize=64)
def load_font(candidates: Tuple[str, ...], size: int) -> Tuple[ImageFont.ImageFont, bool]:
    """
    Load the first available TrueType font from a list of candidates.

    Returns the font and whether it came from the candidate list. When no
    candidate can be loaded Pillow's built-in font is returned instead.
    """
    for name in candidates:
        try:
            return ImageFont.truetype(name, size), True
        except OSError:
            continue

    logger.debug(f"No font from {candidates} available, using default font")
    return ImageFont.load_default(size), False


def baseline_offset(font) -> int:
    """Distance from the top of a drawn line of text to its baseline"""
    if hasattr(font, 'getmetrics'):
        return font.getmetrics()[0]
    return font.getbbox("Ag")[3]


def fit_product_image(image: Image.Image, box: Tuple[int, int]) -> Image.Image:
    """Scale an image to fit inside box, keeping its aspect ratio"""
    return ImageOps.contain(image, box, Image.Resampling.LANCZOS)


class CardRenderer:
    """Renders one price card per product record."""

    def __init__(self, layout: TemplateLayout):
        self.layout = layout

    def _font_for(self, element: TextElement):
        if element.bold:
            font, found = load_font(tuple(self.layout.bold_font_candidates), element.size)
            if found:
                return font, 0
            # No bold face available; fake it with a stroke
            font, _ = load_font(tuple(self.layout.font_candidates), element.size)
            return font, 1

        font, _ = load_font(tuple(self.layout.font_candidates), element.size)
        return font, 0

    def draw_text_layer(self, record: ProductRecord) -> Image.Image:
        """Draw the text template for a record on a transparent layer"""
        layer = Image.new('RGBA', self.layout.card_size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)

        for element in self.layout.text_elements:
            text = getattr(record, element.field, "")
            if not text:
                continue

            font, stroke = self._font_for(element)
            ascent = baseline_offset(font)
            top = element.y - ascent

            draw.text((element.x, top), text, font=font, fill=element.color,
                      stroke_width=stroke, stroke_fill=element.color)

            if element.strikethrough:
                width = draw.textlength(text, font=font)
                strike_y = element.y - int(ascent * 0.3)
                line_width = max(1, element.size // 15)
                draw.line([(element.x, strike_y), (element.x + width, strike_y)],
                          fill=element.color, width=line_width)

        return layer

    def render(self,
               record: ProductRecord,
               background: Optional[Image.Image] = None,
               product_image: Optional[Image.Image] = None) -> Image.Image:
        """
        Render a single card.

        Layers, bottom to top: white canvas, background at (0, 0), product
        photo fitted into its slot, text overlay. Layers larger than the
        card are clipped.
        """
        card = Image.new('RGB', self.layout.card_size, self.layout.canvas_color)

        if background is not None:
            card.paste(background, (0, 0), background)

        if product_image is not None:
            photo = fit_product_image(product_image, self.layout.product_image_box)
            card.paste(photo, self.layout.product_image_offset, photo)

        text_layer = self.draw_text_layer(record)
        card.paste(text_layer, (0, 0), text_layer)

        return card


def render_cards(records: Sequence[ProductRecord],
                 images_dir: Path,
                 layout: TemplateLayout,
                 workers: int = 1) -> List[Image.Image]:
    """
    Render every record into a card, in input order.

    The background is loaded once for the batch; product photos are
    resolved per record. With more than one worker the cards are rendered
    on a thread pool, which yields the same images in the same order.
    """
    renderer = CardRenderer(layout)
    background = load_background(images_dir, layout.background_filename)

    def render_one(record: ProductRecord) -> Image.Image:
        photo_path = find_product_image(record.product, images_dir, layout.image_extensions)
        photo = open_image(photo_path) if photo_path else None
        return renderer.render(record, background, photo)

    if workers > 1 and len(records) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            cards = list(executor.map(render_one, records))
    else:
        cards = [render_one(record) for record in records]

    logger.info(f"Rendered {len(cards)} cards")
    return cards
