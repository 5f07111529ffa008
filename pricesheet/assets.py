"""
Image asset lookup for price cards.

Product photos live in a flat image directory and are named after a slug
of the product name (``Fresh Milk`` -> ``fresh-milk.png``). A shared
``background.png`` in the same directory is layered under every card.
Nothing is cached: the directory is probed again for every row.
"""

import re
from pathlib import Path
from typing import Optional, Sequence

from PIL import Image
from loguru import logger

from .errors import AssetError


DEFAULT_EXTENSIONS = (".png", ".jpg", ".jpeg", ".webp")

_WHITESPACE = re.compile(r'\s+')


def slugify(name: str) -> str:
    """Lowercase a display name and join its words with hyphens"""
    return _WHITESPACE.sub('-', name.lower())


def find_product_image(name: str,
                       images_dir: Path,
                       extensions: Sequence[str] = DEFAULT_EXTENSIONS) -> Optional[Path]:
    """
    Find the photo for a product by slug.

    Probes ``<images_dir>/<slug><ext>`` for each extension in order and
    returns the first file that exists, or None when there is no photo.
    """
    slug = slugify(name)
    logger.debug(f"Looking for image: {slug}")

    for ext in extensions:
        candidate = Path(images_dir) / f"{slug}{ext}"
        if candidate.is_file():
            logger.debug(f"Image found for product '{name}': {candidate}")
            return candidate

    logger.info(f"No image found for product: {name}")
    return None


def open_image(path: Path) -> Image.Image:
    """Open an image file fully into memory as RGBA"""
    try:
        with Image.open(path) as img:
            img.load()
            return img.convert('RGBA')
    except (OSError, Image.DecompressionBombError) as e:
        raise AssetError(f"Failed to load image asset {path}: {e}",
                         details={'path': str(path)},
                         suggestions=["Re-export the image as PNG or JPEG",
                                      "Remove the file so the card renders without it"])


def load_background(images_dir: Path, filename: str = "background.png") -> Optional[Image.Image]:
    """Load the shared card background, or None when it is not present"""
    path = Path(images_dir) / filename
    if not path.is_file():
        logger.info(f"No background found at {path}, cards start on a blank canvas")
        return None

    background = open_image(path)
    logger.debug(f"Loaded background: {path} ({background.size})")
    return background
