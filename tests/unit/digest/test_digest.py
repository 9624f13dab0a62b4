"""Tests for the streaming digest engine.

Covers well-known digest constants, fixed-width lowercase output, buffer-size
independence, and the read-failure contract.
"""

from __future__ import annotations

import io
import unittest

from hashall.digest import HashAlgorithm, digest, empty_digest, hash_stream
from hashall.errors import ErrorKind, ReadError


class _FailingStream(io.RawIOBase):
    """Returns one chunk, then fails like a disk error."""

    def __init__(self) -> None:
        self._served = False

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        if not self._served:
            self._served = True
            return b"partial"
        raise OSError(5, "Input/output error")


class DigestTests(unittest.TestCase):
    def test_empty_input_matches_well_known_constants(self) -> None:
        self.assertEqual(empty_digest(HashAlgorithm.MD5), "d41d8cd98f00b204e9800998ecf8427e")
        self.assertEqual(empty_digest(HashAlgorithm.SHA1), "da39a3ee5e6b4b0d3255bfef95601890afd80709")
        self.assertEqual(digest(HashAlgorithm.MD5, io.BytesIO(b"")), "d41d8cd98f00b204e9800998ecf8427e")

    def test_known_vectors_are_lowercase_and_fixed_width(self) -> None:
        md5_hex = digest(HashAlgorithm.MD5, io.BytesIO(b"abc"))
        sha1_hex = digest(HashAlgorithm.SHA1, io.BytesIO(b"abc"))
        self.assertEqual(md5_hex, "900150983cd24fb0d6963f7d28e17f72")
        self.assertEqual(sha1_hex, "a9993e364706816aba3e25717850c26c9cd0d89d")
        self.assertEqual(len(md5_hex), HashAlgorithm.MD5.hex_width)
        self.assertEqual(HashAlgorithm.MD5.hex_width, 32)
        self.assertEqual(HashAlgorithm.SHA1.hex_width, 40)
        self.assertEqual(sha1_hex, sha1_hex.lower())

    def test_buffer_size_does_not_change_digest(self) -> None:
        payload = bytes(range(256)) * 97
        whole, whole_size = hash_stream(
            HashAlgorithm.SHA256, io.BytesIO(payload), logical_path="p", buffer_size=1 << 20
        )
        tiny, tiny_size = hash_stream(HashAlgorithm.SHA256, io.BytesIO(payload), logical_path="p", buffer_size=7)
        self.assertEqual(whole, tiny)
        self.assertEqual(whole_size, len(payload))
        self.assertEqual(tiny_size, len(payload))

    def test_hashing_twice_is_idempotent(self) -> None:
        payload = b"same bytes every time"
        first = digest(HashAlgorithm.SHA1, io.BytesIO(payload))
        second = digest(HashAlgorithm.SHA1, io.BytesIO(payload))
        self.assertEqual(first, second)

    def test_mid_read_failure_raises_read_error_for_logical_path(self) -> None:
        with self.assertRaises(ReadError) as caught:
            hash_stream(HashAlgorithm.MD5, _FailingStream(), logical_path="disk/file.bin", buffer_size=4)
        self.assertEqual(caught.exception.logical_path, "disk/file.bin")
        self.assertEqual(caught.exception.kind, ErrorKind.READ)
        self.assertIn("Input/output error", caught.exception.message)

    def test_non_positive_buffer_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            hash_stream(HashAlgorithm.MD5, io.BytesIO(b"x"), logical_path="x", buffer_size=0)

    def test_algorithm_lookup_accepts_dashed_and_upper_names(self) -> None:
        self.assertIs(HashAlgorithm.from_name("SHA-1"), HashAlgorithm.SHA1)
        self.assertIs(HashAlgorithm.from_name("md5"), HashAlgorithm.MD5)
        with self.assertRaises(ValueError):
            HashAlgorithm.from_name("crc32")


if __name__ == "__main__":
    unittest.main()
