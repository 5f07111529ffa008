"""
Grid layout for the Price Sheet Generator.

Cards are placed row-major in spreadsheet order, `columns` cards per row,
with no gaps or padding. Slots after the last card stay canvas-colored.
"""

import math
from typing import List, Sequence, Tuple

from PIL import Image
from loguru import logger

from .config import TemplateLayout
from .errors import RenderError


def grid_size(count: int, layout: TemplateLayout) -> Tuple[int, int]:
    """Pixel size of a grid holding `count` cards"""
    rows = math.ceil(count / layout.columns)
    return (layout.columns * layout.card_width, rows * layout.card_height)


def cell_position(index: int, layout: TemplateLayout) -> Tuple[int, int]:
    """Top-left pixel of the cell holding card `index`"""
    column = index % layout.columns
    row = index // layout.columns
    return (column * layout.card_width, row * layout.card_height)


def cell_positions(count: int, layout: TemplateLayout) -> List[Tuple[int, int]]:
    return [cell_position(i, layout) for i in range(count)]


def compose_grid(cards: Sequence[Image.Image], layout: TemplateLayout) -> Image.Image:
    """Stitch rendered cards into one grid image"""
    if not cards:
        raise RenderError("No cards to lay out",
                          suggestions=["Add at least one product row to the spreadsheet"])

    size = grid_size(len(cards), layout)
    grid = Image.new('RGB', size, layout.canvas_color)

    for card, position in zip(cards, cell_positions(len(cards), layout)):
        grid.paste(card, position)

    logger.info(f"Composed {len(cards)} cards into a {size[0]}x{size[1]} grid")
    return grid
