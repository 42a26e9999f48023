"""PDF417 rendering boundary.

The symbol itself is produced by ``pdf417gen``; this module only supplies the
encoded text plus the fixed symbol parameters and turns renderer failures into a
single ``RenderingError``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

import pdf417gen
from PIL import Image

from aamvagen.errors import RenderingError
from aamvagen.model import AAMVARecord

logger = logging.getLogger(__name__)

DARK = "#000000"
LIGHT = "#FFFFFF"


def _flag(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"expected true or false, got {value!r}")
    return value


@dataclass
class RenderConfig:
    module_width: int = 3  # pixels per module
    row_height_ratio: int = 1  # row height as a multiple of module width
    security_level: int = 5  # PDF417 error correction level
    columns: int = 10
    padding: int = 20
    inverted: bool = True  # light modules on a dark background

    @staticmethod
    def from_mapping(payload: Mapping[str, Any]) -> RenderConfig:
        defaults = RenderConfig()
        return RenderConfig(
            module_width=int(payload.get("module_width", defaults.module_width)),
            row_height_ratio=int(payload.get("row_height_ratio", defaults.row_height_ratio)),
            security_level=int(payload.get("security_level", defaults.security_level)),
            columns=int(payload.get("columns", defaults.columns)),
            padding=int(payload.get("padding", defaults.padding)),
            inverted=_flag(payload.get("inverted", defaults.inverted)),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @property
    def colors(self) -> tuple[str, str]:
        """(foreground, background)"""
        return (LIGHT, DARK) if self.inverted else (DARK, LIGHT)


def render_barcode(text: str, config: RenderConfig | None = None) -> Image.Image:
    """Render ``text`` as a PDF417 symbol image."""
    cfg = config or RenderConfig()
    fg_color, bg_color = cfg.colors
    try:
        codes = pdf417gen.encode(text, columns=cfg.columns, security_level=cfg.security_level)
        image = pdf417gen.render_image(
            codes,
            scale=cfg.module_width,
            ratio=cfg.row_height_ratio,
            padding=cfg.padding,
            fg_color=fg_color,
            bg_color=bg_color,
        )
    except ValueError as exc:
        raise RenderingError(f"PDF417 renderer rejected the record: {exc}") from exc
    logger.debug("rendered %d rows, image %sx%s", len(codes), *image.size)
    return image


def default_image_name(record: AAMVARecord) -> str:
    return (
        f"{record.document.document_type}_{record.personal.last_name}_"
        f"{record.personal.first_name}.png"
    )


def save_barcode(text: str, path: Path, config: RenderConfig | None = None) -> Path:
    image = render_barcode(text, config)
    path.parent.mkdir(parents=True, exist_ok=True)
    image.save(path, format="PNG")
    return path
