"""
Name: Drive Domain Types Tests

Responsibilities:
  - Validate Visibility coercion
  - Validate WriteOptions immutability and helpers
"""

import pytest

from drive_s3.domain.entities import ContentHeaders, Visibility, WriteOptions

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "value, expected",
    [
        ("public", Visibility.PUBLIC),
        (" PRIVATE ", Visibility.PRIVATE),
        (Visibility.PUBLIC, Visibility.PUBLIC),
    ],
)
def test_visibility_coerce(value, expected):
    assert Visibility.coerce(value) is expected


def test_visibility_coerce_rejects_partial_states():
    with pytest.raises(ValueError):
        Visibility.coerce("authenticated-read")


def test_write_options_coerce_visibility():
    assert WriteOptions(visibility="public").visibility is Visibility.PUBLIC


def test_write_options_extra_is_read_only():
    source = {"StorageClass": "STANDARD"}
    options = WriteOptions(extra=source)
    source["StorageClass"] = "GLACIER"

    assert options.extra["StorageClass"] == "STANDARD"
    with pytest.raises(TypeError):
        options.extra["StorageClass"] = "GLACIER"  # type: ignore[index]


def test_with_visibility_returns_copy():
    options = WriteOptions(content_type="text/plain", extra={"Metadata": {"a": "1"}})

    public = options.with_visibility("public")

    assert options.visibility is None
    assert public.visibility is Visibility.PUBLIC
    assert public.content_type == "text/plain"
    assert public.extra == {"Metadata": {"a": "1"}}


def test_headers_view():
    options = WriteOptions(content_type="text/plain", cache_control="no-cache")

    assert options.headers == ContentHeaders(
        content_type="text/plain", cache_control="no-cache"
    )
