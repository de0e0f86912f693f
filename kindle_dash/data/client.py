"""HTTP client shared by every dashboard data source."""

from __future__ import annotations

from io import BytesIO
from typing import Any

from PIL import Image, UnidentifiedImageError
import requests

USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64; rv:126.0) Gecko/20100101 Firefox/126.0"


class SourceError(Exception):
    """Raised when a data source request fails or returns unusable data."""


class SourceClient:
    """Thin wrapper around requests with the error handling sources rely on."""

    def __init__(self, timeout_seconds: float = 30) -> None:
        self._timeout_seconds = timeout_seconds

    def get_text(self, url: str, params: dict[str, Any] | None = None) -> str:
        """Fetch ``url`` and return the decoded body."""
        return self._get(url, params=params).text

    def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """Fetch ``url`` and return the parsed JSON body."""
        response = self._get(url, params=params)
        try:
            return response.json()
        except ValueError as exc:
            raise SourceError(f"Response from {url} was not valid JSON") from exc

    def get_image(self, url: str) -> Image.Image:
        """Fetch and decode an image."""
        response = self._get(url)
        try:
            image = Image.open(BytesIO(response.content))
            image.load()
        except (UnidentifiedImageError, OSError) as exc:
            raise SourceError(f"Failed to load image from {url}: {exc}") from exc
        return image

    def _get(self, url: str, params: dict[str, Any] | None = None) -> requests.Response:
        headers = {"User-Agent": USER_AGENT}
        try:
            response = requests.get(
                url,
                headers=headers,
                params=params,
                timeout=self._timeout_seconds,
                allow_redirects=False,
            )
        except requests.RequestException as exc:
            raise SourceError(f"Request to {url} failed: {exc}") from exc

        if response.status_code != 200:
            body_text = response.text.strip()
            detail = f"Status {response.status_code}"
            if body_text:
                detail = f"{detail}, Body: {body_text[:200]}"
            raise SourceError(f"Request to {url} failed: {detail}")

        return response


__all__ = ["SourceClient", "SourceError", "USER_AGENT"]
