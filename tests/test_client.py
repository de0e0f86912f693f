from __future__ import annotations

from io import BytesIO
from typing import Any
from unittest.mock import Mock, patch

from PIL import Image
import pytest
import requests

from kindle_dash.data.client import SourceClient, SourceError


@pytest.fixture()
def client() -> SourceClient:
    return SourceClient(timeout_seconds=5)


def _mock_response(
    status_code: int,
    json_data: Any = None,
    text: str = "",
    content: bytes = b"",
) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.text = text
    response.content = content
    if json_data is not None:
        response.json.return_value = json_data
    else:
        response.json.side_effect = ValueError("Invalid JSON")
    return response


def _png_bytes() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (3, 2), (0, 255, 0)).save(buffer, format="PNG")
    return buffer.getvalue()


def test_get_text_returns_body(client: SourceClient) -> None:
    response = _mock_response(200, text="08:10\t0.4\tbajamar")
    with patch("requests.get", return_value=response) as mock_get:
        text = client.get_text("https://example.test/tides")

    assert text == "08:10\t0.4\tbajamar"
    mock_get.assert_called_once()
    assert mock_get.call_args.kwargs["timeout"] == 5
    assert "User-Agent" in mock_get.call_args.kwargs["headers"]


def test_get_json_returns_data(client: SourceClient) -> None:
    response = _mock_response(200, {"hourly": {}})
    with patch("requests.get", return_value=response) as mock_get:
        data = client.get_json("https://example.test/forecast", params={"a": 1})

    assert data == {"hourly": {}}
    assert mock_get.call_args.kwargs["params"] == {"a": 1}


def test_get_image_decodes_png(client: SourceClient) -> None:
    response = _mock_response(200, content=_png_bytes())
    with patch("requests.get", return_value=response):
        image = client.get_image("https://example.test/radar.png")

    assert image.size == (3, 2)


def test_get_image_rejects_garbage(client: SourceClient) -> None:
    response = _mock_response(200, content=b"<html>not an image</html>")
    with patch("requests.get", return_value=response):
        with pytest.raises(SourceError):
            client.get_image("https://example.test/radar.png")


def test_non_200_raises_source_error(client: SourceClient) -> None:
    response = _mock_response(404, text="Not found")
    with patch("requests.get", return_value=response):
        with pytest.raises(SourceError) as exc_info:
            client.get_text("https://example.test/missing")

    assert "404" in str(exc_info.value)


def test_network_error_raises_source_error(client: SourceClient) -> None:
    with patch("requests.get", side_effect=requests.exceptions.ConnectionError("boom")):
        with pytest.raises(SourceError):
            client.get_text("https://example.test/tides")


def test_invalid_json_raises_source_error(client: SourceClient) -> None:
    response = _mock_response(200, None)
    with patch("requests.get", return_value=response):
        with pytest.raises(SourceError):
            client.get_json("https://example.test/forecast")
