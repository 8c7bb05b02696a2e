"""Default audio and image probes, backed by mutagen and Pillow"""

from io import BytesIO
from typing import Optional

import mutagen
from mutagen import MutagenError
from PIL import Image

from beatmapcheck.context import ExtractedInfo
from beatmapcheck.typing import ImageInfo

THUMBNAIL_SIZE = (256, 256)
THUMBNAIL_QUALITY = 80


def probe_audio(data: bytes) -> Optional[float]:
    """Ogg Vorbis is what the game expects, anything mutagen recognizes
    (wav included) is accepted"""
    try:
        audio = mutagen.File(BytesIO(data))
    except (MutagenError, OSError, ValueError, EOFError):
        return None

    if audio is None or audio.info is None:
        return None

    return float(audio.info.length)


def probe_image(data: bytes, info: ExtractedInfo) -> Optional[ImageInfo]:
    try:
        with Image.open(BytesIO(data)) as image:
            image.load()
            result = ImageInfo(
                format=(image.format or "").lower(),
                width=image.width,
                height=image.height,
            )
            info.thumbnail = make_thumbnail(image)
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError):
        return None

    return result


def make_thumbnail(image: Image.Image) -> bytes:
    thumbnail = image.convert("RGB")
    thumbnail.thumbnail(THUMBNAIL_SIZE)
    output = BytesIO()
    thumbnail.save(output, format="JPEG", quality=THUMBNAIL_QUALITY)
    return output.getvalue()
