from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, BinaryIO, Optional, Protocol

if TYPE_CHECKING:
    from beatmapcheck.context import ExtractedInfo


@dataclass(frozen=True)
class ImageInfo:
    format: str
    width: int
    height: int


class FileResolver(Protocol):
    """Gives access to a file of the package from its name, in whatever case.
    Returns None if there is no such file"""

    def __call__(self, name: str) -> Optional[BinaryIO]:
        ...


class AudioProbe(Protocol):
    """Decodes audio bytes and returns the duration in seconds, None if the
    bytes could not be understood as audio"""

    def __call__(self, data: bytes) -> Optional[float]:
        ...


class ImageProbe(Protocol):
    """Decodes image bytes and returns their format and dimensions, None if
    they are not a readable image. Stores a thumbnail in the context on
    success"""

    def __call__(self, data: bytes, info: ExtractedInfo) -> Optional[ImageInfo]:
        ...
