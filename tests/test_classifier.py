"""
Tests for MIME lookup and the preview classification order.
"""

import pytest

from fileserve.services.classifier import (
    DEFAULT_MIME_TYPE,
    ContentKind,
    classify,
    get_extension,
    get_mime_type,
    is_text_mime,
)

MIB = 1024 * 1024
LIMITS = {"max_preview": 10 * MIB, "max_base64": MIB}


# ---------------------------------------------------------------------------
# Extension and MIME lookup
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "filename, expected",
    [("b.txt", "txt"), ("Photo.PNG", "png"), ("archive.tar.gz", "gz"), ("Makefile", ""), (".bashrc", "bashrc")],
)
def test_get_extension(filename, expected):
    assert get_extension(filename) == expected


def test_known_and_unknown_mime_types():
    assert get_mime_type("md") == "text/markdown"
    assert get_mime_type("tsx") == "application/typescript"
    assert get_mime_type("PNG") == "image/png"
    assert get_mime_type("bin") == DEFAULT_MIME_TYPE
    assert get_mime_type("") == DEFAULT_MIME_TYPE


@pytest.mark.parametrize(
    "mime", ["text/plain", "text/yaml", "application/json", "application/javascript", "application/xml"]
)
def test_text_like_types(mime):
    assert is_text_mime(mime)


def test_pdf_is_not_text():
    assert not is_text_mime("application/pdf")


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

class TestClassify:
    def test_text_is_utf8(self):
        assert classify("text/markdown", 120, **LIMITS) is ContentKind.UTF8

    def test_json_is_utf8(self):
        assert classify("application/json", 5 * MIB, **LIMITS) is ContentKind.UTF8

    def test_image_is_base64_at_any_size_below_ceiling(self):
        assert classify("image/png", 9 * MIB, **LIMITS) is ContentKind.BASE64

    def test_small_binary_at_exactly_one_mib_is_base64(self):
        assert classify(DEFAULT_MIME_TYPE, MIB, **LIMITS) is ContentKind.BASE64

    def test_binary_just_over_one_mib_is_unsupported(self):
        assert classify(DEFAULT_MIME_TYPE, MIB + 1, **LIMITS) is ContentKind.REJECT_UNSUPPORTED

    @pytest.mark.parametrize("mime", ["text/plain", "image/png", "application/pdf"])
    def test_exactly_ten_mib_is_too_large_for_every_type(self, mime):
        assert classify(mime, 10 * MIB, **LIMITS) is ContentKind.REJECT_TOO_LARGE

    def test_just_under_ten_mib_text_is_still_utf8(self):
        assert classify("text/plain", 10 * MIB - 1, **LIMITS) is ContentKind.UTF8

    def test_defaults_come_from_settings(self):
        assert classify("application/zip", MIB) is ContentKind.BASE64
        assert classify("application/zip", 20 * MIB) is ContentKind.REJECT_TOO_LARGE
