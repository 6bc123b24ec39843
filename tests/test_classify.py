# -*- coding: utf-8 -*-

import pytest

from hashdrop.classify import UNKNOWN, infer_extension


@pytest.mark.parametrize(
    "data,extension",
    [
        (b"%PDF-1.4\n%test\n", "pdf"),
        (b"GIF89a\x01\x00\x01\x00\x00\x00\x00", "gif"),
        (b"\x89PNG\r\n\x1a\n" + b"\x00" * 24, "png"),
        (b"\xff\xd8\xff\xe0" + b"\x00" * 16, "jpg"),
        (b"\x00" * 512, UNKNOWN),
        (b"", UNKNOWN),
    ],
)
def test_infer_extension(tmpdir, data, extension):
    path = tmpdir.join("upload")
    path.write(data, mode="wb")

    assert infer_extension(str(path)) == extension


def test_infer_extension_ignores_file_name(tmpdir):
    path = tmpdir.join("upload.png")
    path.write(b"%PDF-1.4\n", mode="wb")

    assert infer_extension(str(path)) == "pdf"


def test_infer_extension_missing(tmpdir):
    with pytest.raises(OSError):
        infer_extension(str(tmpdir.join("missing")))
