# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

import base64
import unittest

from steamguard_extractor.encoding import BASE32_ALPHABET, encode_base32


def _stdlib_base32(data: bytes) -> str:
    return base64.b32encode(data).decode("ascii").rstrip("=")


def _decode_unpadded(text: str) -> bytes:
    return base64.b32decode(text + "=" * (-len(text) % 8))


class TestBase32(unittest.TestCase):
    def test_alphabet(self) -> None:
        self.assertEqual(BASE32_ALPHABET, "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567")

    def test_empty_input(self) -> None:
        self.assertEqual(encode_base32(b""), "")

    def test_boundary_lengths_match_stdlib(self) -> None:
        cases = (
            b"\x00",
            b"\xff",
            b"ab",
            b"hello",
            b"\x00" * 5,
            bytes(range(10)),
            bytes(range(256)),
        )
        for data in cases:
            with self.subTest(length=len(data), data=data[:8]):
                encoded = encode_base32(data)
                self.assertEqual(encoded, _stdlib_base32(data))
                self.assertNotIn("=", encoded)
                self.assertEqual(_decode_unpadded(encoded), data)

    def test_known_values(self) -> None:
        self.assertEqual(encode_base32(b"f"), "MY")
        self.assertEqual(encode_base32(b"fo"), "MZXQ")
        self.assertEqual(encode_base32(b"foobar"), "MZXW6YTBOI")

    def test_shared_secret_sized_input(self) -> None:
        data = base64.b64decode("AAAAAAAAAAAAAAAA")
        self.assertEqual(encode_base32(data), "A" * 20)


if __name__ == "__main__":
    unittest.main()
