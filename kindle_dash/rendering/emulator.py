"""Frame output helpers for the e-ink display."""

from __future__ import annotations

from pathlib import Path

from PIL import Image


def prepare_for_device(image: Image.Image, width: int, height: int, rotate: bool = True) -> Image.Image:
    """Scale a landscape frame to the panel and convert it to grayscale.

    ``width`` and ``height`` are the panel's portrait dimensions. With
    ``rotate`` the frame is turned 90 degrees clockwise to fit them.
    """
    frame = image.resize((height, width), Image.LANCZOS)
    if rotate:
        frame = frame.transpose(Image.Transpose.ROTATE_270)
    return frame.convert("L")


def save_frame(image: Image.Image, path: str = "output.png") -> Path:
    """Save a frame to disk as a PNG image."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(output_path, format="PNG")
    return output_path


__all__ = ["prepare_for_device", "save_frame"]
