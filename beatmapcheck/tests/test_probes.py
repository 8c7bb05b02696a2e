import wave
from io import BytesIO

import pytest
from PIL import Image

from beatmapcheck.context import ExtractedInfo
from beatmapcheck.probes import THUMBNAIL_SIZE, probe_audio, probe_image
from beatmapcheck.typing import ImageInfo


def make_image(width: int, height: int, format: str) -> bytes:
    output = BytesIO()
    Image.new("RGB", (width, height), color=(255, 0, 128)).save(output, format=format)
    return output.getvalue()


def make_wav(seconds: float, rate: int = 8000) -> bytes:
    output = BytesIO()
    with wave.open(output, "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(rate)
        wav.writeframes(b"\x00\x00" * int(seconds * rate))
    return output.getvalue()


def test_that_png_images_are_recognized() -> None:
    info = ExtractedInfo()
    result = probe_image(make_image(300, 200, "PNG"), info)
    assert result == ImageInfo(format="png", width=300, height=200)


def test_that_probing_an_image_makes_a_jpeg_thumbnail() -> None:
    info = ExtractedInfo()
    probe_image(make_image(512, 512, "PNG"), info)
    assert info.thumbnail is not None
    with Image.open(BytesIO(info.thumbnail)) as thumbnail:
        assert thumbnail.format == "JPEG"
        assert thumbnail.size == THUMBNAIL_SIZE


def test_that_jpeg_images_are_recognized() -> None:
    result = probe_image(make_image(256, 256, "JPEG"), ExtractedInfo())
    assert result == ImageInfo(format="jpeg", width=256, height=256)


def test_that_garbage_is_not_an_image() -> None:
    info = ExtractedInfo()
    assert probe_image(b"definitely not an image", info) is None
    assert info.thumbnail is None


def test_that_wav_duration_is_read() -> None:
    assert probe_audio(make_wav(2)) == pytest.approx(2, abs=0.01)


def test_that_garbage_is_not_audio() -> None:
    assert probe_audio(b"definitely not audio") is None
    assert probe_audio(b"") is None
