from types import SimpleNamespace

import pytest

from ad_campaign_cli.exceptions import NoImageReturnedError
from ad_campaign_cli.providers.base import ImageOutput, TextOutput
from ad_campaign_cli.providers.extractor import extract_model_output, to_data_url


def _response(parts: list, text: str | None = None) -> SimpleNamespace:
    candidate = SimpleNamespace(content=SimpleNamespace(parts=parts))
    return SimpleNamespace(candidates=[candidate], text=text)


def test_extracts_inline_image_after_text_part() -> None:
    response = _response(
        [
            SimpleNamespace(text="Here is your ad", inline_data=None),
            SimpleNamespace(text=None, inline_data=SimpleNamespace(mime_type="image/jpeg", data=b"jpeg-bytes")),
        ],
        text="Here is your ad",
    )

    output = extract_model_output(response)

    assert output == ImageOutput(mime_type="image/jpeg", data=b"jpeg-bytes", text="Here is your ad")
    assert to_data_url(output) == "data:image/jpeg;base64,anBlZy1ieXRlcw=="


def test_searches_later_candidates() -> None:
    response = SimpleNamespace(
        candidates=[
            SimpleNamespace(content=None),
            SimpleNamespace(content=SimpleNamespace(parts=[SimpleNamespace(inline_data=SimpleNamespace(mime_type=None, data=b"x"))])),
        ],
        text=None,
    )
    output = extract_model_output(response)
    assert isinstance(output, ImageOutput)
    assert output.mime_type == "image/png"


def test_text_only_response_raises_no_image_returned() -> None:
    output = extract_model_output(_response([SimpleNamespace(text="I can't help with that", inline_data=None)], text="I can't help with that"))

    assert output == TextOutput(text="I can't help with that")
    with pytest.raises(NoImageReturnedError) as exc:
        to_data_url(output)
    assert exc.value.text == "I can't help with that"
    assert "I can't help with that" in str(exc.value)


def test_empty_response_uses_placeholder_text() -> None:
    output = extract_model_output(SimpleNamespace(candidates=None, text=None))

    with pytest.raises(NoImageReturnedError) as exc:
        to_data_url(output)
    assert "No text response received." in str(exc.value)
    assert exc.value.text == ""
