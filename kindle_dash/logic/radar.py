"""Nearest-color reclassification of radar imagery for the e-ink panel."""

from __future__ import annotations

import numpy as np
from PIL import Image

DEFAULT_INTENSITY = 255
ROW_BAND = 128

# (reference RGB, output intensity), checked in this order.
RADAR_PALETTE: tuple[tuple[tuple[int, int, int], int], ...] = (
    ((205, 255, 255), 255),  # light teal
    ((0, 0, 254), 242),  # blue
    ((129, 243, 255), 230),  # teal
    ((0, 255, 0), 190),  # green
    ((255, 255, 75), 160),  # yellow
    ((255, 218, 0), 140),  # light orange
    ((255, 181, 0), 120),  # orange
    ((255, 0, 0), 80),  # red
    ((231, 0, 129), 60),  # purple
    ((181, 0, 181), 40),  # dark purple
)


def color_distance_sq(c1: tuple[int, int, int], c2: tuple[int, int, int]) -> int:
    """Squared Euclidean distance between two RGB colors."""
    dr = int(c1[0]) - int(c2[0])
    dg = int(c1[1]) - int(c2[1])
    db = int(c1[2]) - int(c2[2])
    return dr * dr + dg * dg + db * db


def classify_pixel(
    rgb: tuple[int, int, int],
    palette: tuple[tuple[tuple[int, int, int], int], ...] = RADAR_PALETTE,
) -> int:
    """Return the intensity of the palette anchor nearest to ``rgb``."""
    best_value = DEFAULT_INTENSITY
    best_dist = None
    for anchor, value in palette:
        dist = color_distance_sq(rgb, anchor)
        if best_dist is None or dist < best_dist:
            best_dist = dist
            best_value = value
    return best_value


def classify(
    image: Image.Image,
    palette: tuple[tuple[tuple[int, int, int], int], ...] = RADAR_PALETTE,
) -> Image.Image:
    """Map every pixel of ``image`` to the intensity of its nearest anchor color.

    Alpha is ignored. The result is a mode "L" image of the same size.
    """
    width, height = image.size
    if not palette:
        return Image.new("L", (width, height), DEFAULT_INTENSITY)

    rgb = np.asarray(image.convert("RGB"), dtype=np.int32)
    anchors = np.array([anchor for anchor, _ in palette], dtype=np.int32)
    values = np.array([value for _, value in palette], dtype=np.uint8)

    out = np.empty((height, width), dtype=np.uint8)
    for top in range(0, height, ROW_BAND):
        band = rgb[top : top + ROW_BAND]
        diff = band[:, :, None, :] - anchors[None, None, :, :]
        dist = (diff * diff).sum(axis=-1)
        # argmin keeps the first minimum, so ties go to the earlier anchor.
        out[top : top + ROW_BAND] = values[dist.argmin(axis=-1)]

    return Image.fromarray(out)


__all__ = [
    "DEFAULT_INTENSITY",
    "RADAR_PALETTE",
    "classify",
    "classify_pixel",
    "color_distance_sq",
]
