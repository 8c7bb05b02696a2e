from io import BytesIO
from pathlib import Path

import pytest

from beatmapcheck.check import check_folder
from beatmapcheck.files import (
    declared_files,
    make_folder_resolver,
    read_file,
    read_limited,
)


def test_that_reading_within_the_limit_is_silent(
    recwarn: pytest.WarningsRecorder,
) -> None:
    assert read_limited(BytesIO(b"0123456789"), 10, "a.dat") == b"0123456789"
    assert len(recwarn) == 0


def test_that_reading_past_the_limit_truncates_and_warns() -> None:
    with pytest.warns(UserWarning, match="a.dat is larger than 4 bytes"):
        assert read_limited(BytesIO(b"0123456789"), 4, "a.dat") == b"0123"


def test_that_folder_files_are_found_regardless_of_case(tmp_path: Path) -> None:
    (tmp_path / "Info.dat").write_bytes(b"{}")
    (tmp_path / "ExpertPlus.dat").write_bytes(b"[]")
    (tmp_path / "subfolder").mkdir()

    assert declared_files(tmp_path) == {"info.dat", "expertplus.dat"}
    get_file = make_folder_resolver(tmp_path)
    assert read_file(get_file, "INFO.DAT") == b"{}"
    assert read_file(get_file, "expertplus.DAT", limit=2) == b"[]"
    assert read_file(get_file, "missing.dat") is None


def test_that_checking_something_else_than_a_folder_fails(tmp_path: Path) -> None:
    path = tmp_path / "Info.dat"
    path.write_bytes(b"{}")
    with pytest.raises(ValueError):
        check_folder(path)
