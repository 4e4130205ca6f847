import pytest

from ad_campaign_cli.exceptions import InvalidImageFormatError
from ad_campaign_cli.models.parts import (
    GenerationRequest,
    InlineImagePart,
    TextPart,
    data_url_from_bytes,
    image_part_from_data_url,
)
from fakes import PNG_BYTES, PNG_DATA_URL


def test_parses_png_data_url() -> None:
    part = image_part_from_data_url(PNG_DATA_URL)
    assert part.mime_type == "image/png"
    assert part.data == PNG_BYTES


def test_accepts_subtypes_with_symbols() -> None:
    part = image_part_from_data_url(data_url_from_bytes(b"<svg/>", "image/svg+xml"))
    assert part.mime_type == "image/svg+xml"


@pytest.mark.parametrize(
    "data_url",
    [
        "",
        "not a data url",
        "https://example.com/product.png",
        "data:text/plain;base64,aGVsbG8=",
        "data:image/png,aGVsbG8=",
        "data:image/png;base64,",
        "data:image/png;base64,!!!not-base64!!!",
        "image/png;base64,aGVsbG8=",
    ],
)
def test_malformed_data_urls_are_rejected(data_url: str) -> None:
    with pytest.raises(InvalidImageFormatError):
        image_part_from_data_url(data_url)


def test_request_keeps_part_order_and_skips_missing_parts() -> None:
    image = InlineImagePart(mime_type="image/png", data=b"x")
    request = GenerationRequest.of(image, None, TextPart("make it shine"))

    assert request.parts == (image, TextPart("make it shine"))
    assert request.image_parts == [image]
    assert request.text == "make it shine"
