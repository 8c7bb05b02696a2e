import warnings
from pathlib import Path
from typing import BinaryIO, Dict, Optional, Set

from beatmapcheck.typing import FileResolver

# Difficulty files are copied up to this size, the rest is dropped
DIFFICULTY_SIZE_LIMIT = 50 * 1024 * 1024


def read_limited(stream: BinaryIO, limit: int, name: str = "") -> bytes:
    data = stream.read(limit)
    if stream.read(1):
        warnings.warn(
            f"{name or 'File'} is larger than {limit} bytes, "
            "only the beginning will be read"
        )
    return data


def read_file(
    get_file: FileResolver, name: str, limit: Optional[int] = None
) -> Optional[bytes]:
    stream = get_file(name)
    if stream is None:
        return None

    with stream:
        if limit is None:
            return stream.read()
        else:
            return read_limited(stream, limit, name)


def list_files(folder: Path) -> Dict[str, Path]:
    """Maps the lowercased name of each file directly inside the folder to
    its path"""
    return {p.name.lower(): p for p in folder.iterdir() if p.is_file()}


def declared_files(folder: Path) -> Set[str]:
    return set(list_files(folder))


def make_folder_resolver(folder: Path) -> FileResolver:
    files = list_files(folder)

    def folder_resolver(name: str) -> Optional[BinaryIO]:
        path = files.get(name.lower())
        if path is None:
            return None
        return path.open("rb")

    return folder_resolver
