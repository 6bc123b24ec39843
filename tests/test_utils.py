# -*- coding: utf-8 -*-

from io import BytesIO

import pytest

from hashdrop import utils as u


def test_truncate_counts_code_points():
    assert u.truncate("abcdef", 2) == "ab"
    assert u.truncate("éèê", 2) == "éè"
    assert u.truncate("ab", 5) == "ab"


@pytest.mark.parametrize("extension", ["png", ".png"])
def test_truncations(extension):
    names = list(u.truncations("abcd", extension, 2))

    assert names == ["ab.png", "abc.png", "abcd.png"]


def test_truncations_start_past_digest():
    assert list(u.truncations("abcd", "png", 5)) == []


@pytest.mark.parametrize(
    "name,expected",
    [
        (u.STAGING_PREFIX + "1234", True),
        ("/srv/files/" + u.STAGING_PREFIX + "1234", True),
        ("ab.png", False),
        ("tmp.png", False),
    ],
)
def test_is_staging_name(name, expected):
    assert u.is_staging_name(name) is expected


def test_stream_rereads_from_start():
    fileobj = BytesIO(b"foo")
    fileobj.seek(2)
    stream = u.Stream(fileobj)

    assert b"".join(stream) == b"foo"
    assert b"".join(stream) == b"foo"

    stream.close()
    assert fileobj.tell() == 2
    assert not fileobj.closed


def test_stream_path(tmpdir):
    path = tmpdir.join("foo")
    path.write(b"foo", mode="wb")
    stream = u.Stream(str(path))

    assert b"".join(stream) == b"foo"

    stream.close()
    assert stream._obj.closed


def test_stream_invalid():
    with pytest.raises(ValueError):
        u.Stream("foo")


def test_computehash():
    stream = u.Stream(BytesIO(b""))

    assert u.computehash(stream, "sha256") == (
        "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855")
