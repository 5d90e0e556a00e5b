"""Unit tests covering read-result image verification."""

from __future__ import annotations

import base64
import unittest

from toolguard.core.errors import EmptyImagePayloadError, ImageTypeMismatchError
from toolguard.core.results.images import (
    normalize_read_image_result,
    rewrite_read_image_header,
    sniff_mime_from_base64,
)
from toolguard.core.types.tools import ToolResult, image_block, text_block

PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n"
    b"\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06\x00\x00\x00\x1f\x15\xc4\x89"
    b"\x00\x00\x00\x00IEND\xaeB`\x82"
)
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00" + b"\x00" * 48
PDF_BYTES = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n1 0 obj\n<< /Type /Catalog >>\nendobj\n" + b"\x00" * 32


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _image_result(data: str, mime_type: str) -> ToolResult:
    return ToolResult(
        content=[text_block(f"Read image file [{mime_type}]"), image_block(data, mime_type)],
        details={"source": "test"},
    )


class SniffMimeTests(unittest.TestCase):
    def test_detects_signatures(self) -> None:
        self.assertEqual(sniff_mime_from_base64(_b64(PNG_BYTES)), "image/png")
        self.assertEqual(sniff_mime_from_base64(_b64(JPEG_BYTES)), "image/jpeg")
        self.assertEqual(sniff_mime_from_base64(_b64(PDF_BYTES)), "application/pdf")

    def test_short_payload_is_not_sniffed(self) -> None:
        self.assertIsNone(sniff_mime_from_base64("iVBORw"))

    def test_blank_payload_is_not_sniffed(self) -> None:
        self.assertIsNone(sniff_mime_from_base64("   "))

    def test_only_a_bounded_prefix_is_decoded(self) -> None:
        head = _b64(PNG_BYTES)
        payload = head + "A" * (256 - len(head)) + "#" * 1000

        self.assertEqual(sniff_mime_from_base64(payload), "image/png")

    def test_unknown_bytes_yield_none(self) -> None:
        self.assertIsNone(sniff_mime_from_base64(_b64(b"hello plain text, nothing magic here")))


class RewriteHeaderTests(unittest.TestCase):
    def test_rewrites_read_image_header(self) -> None:
        self.assertEqual(
            rewrite_read_image_header("Read image file [image/png]", "image/jpeg"),
            "Read image file [image/jpeg]",
        )

    def test_leaves_other_text_alone(self) -> None:
        self.assertEqual(rewrite_read_image_header("some notes [x]", "image/jpeg"), "some notes [x]")


class NormalizeReadImageResultTests(unittest.TestCase):
    def test_result_without_image_is_returned_unchanged(self) -> None:
        result = ToolResult(content=[text_block("plain text")])

        self.assertIs(normalize_read_image_result(result, "notes.txt"), result)

    def test_mismatched_image_type_is_corrected(self) -> None:
        result = _image_result(_b64(JPEG_BYTES), "image/png")

        normalized = normalize_read_image_result(result, "photo.png")

        self.assertIsNot(normalized, result)
        self.assertEqual(normalized.content[0]["text"], "Read image file [image/jpeg]")
        self.assertEqual(normalized.content[1]["mime_type"], "image/jpeg")
        self.assertEqual(normalized.content[1]["data"], result.content[1]["data"])
        self.assertEqual(normalized.details, {"source": "test"})
        # The original result is left as it was.
        self.assertEqual(result.content[1]["mime_type"], "image/png")

    def test_matching_type_is_returned_unchanged(self) -> None:
        result = _image_result(_b64(PNG_BYTES), "image/png")

        self.assertIs(normalize_read_image_result(result, "icon.png"), result)

    def test_non_image_payload_is_rejected(self) -> None:
        result = _image_result(_b64(PDF_BYTES), "image/png")

        with self.assertRaises(ImageTypeMismatchError) as ctx:
            normalize_read_image_result(result, "report.png")

        self.assertEqual(ctx.exception.detected, "application/pdf")
        self.assertEqual(ctx.exception.declared, "image/png")
        self.assertEqual(
            str(ctx.exception),
            "read: file looks like application/pdf but was treated as image/png (report.png)",
        )

    def test_empty_payload_is_rejected(self) -> None:
        for payload in ("", "   \n"):
            with self.subTest(payload=payload):
                with self.assertRaises(EmptyImagePayloadError) as ctx:
                    normalize_read_image_result(_image_result(payload, "image/png"), "empty.png")
                self.assertEqual(str(ctx.exception), "read: image payload is empty (empty.png)")

    def test_unknown_signature_trusts_declared_type(self) -> None:
        result = _image_result(_b64(b"<svg xmlns='http://www.w3.org/2000/svg'></svg>"), "image/svg+xml")

        self.assertIs(normalize_read_image_result(result, "logo.svg"), result)

    def test_unrelated_blocks_are_preserved(self) -> None:
        extra = {"type": "resource", "uri": "file:///photo.png"}
        result = ToolResult(
            content=[text_block("Read image file [image/png]"), image_block(_b64(JPEG_BYTES), "image/png"), extra]
        )

        normalized = normalize_read_image_result(result, "photo.png")

        self.assertIs(normalized.content[2], extra)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
