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
import json
import unittest
from pathlib import Path

from steamguard_extractor.core.models import SecretFields
from steamguard_extractor.encoding import encode_base32
from steamguard_extractor.recovery import parser

SOURCE = Path("Steamguard-1")


class TestSecretParser(unittest.TestCase):
    def test_uri_secret_wins_over_shared_secret(self) -> None:
        raw = json.dumps(
            {
                "uri": "otpauth://totp/Steam:bob?secret=ABCDEFGHIJKLMNOP&issuer=Steam",
                "shared_secret": "AAAAAAAAAAAAAAAA",
            }
        ).encode()
        record = parser.parse_secret_file(raw, SOURCE)
        self.assertEqual(record.totp_secret, "ABCDEFGHIJKLMNOP")

    def test_shared_secret_fallback(self) -> None:
        raw = b'{"shared_secret":"AAAAAAAAAAAAAAAA","account_name":"bob"}'
        record = parser.parse_secret_file(raw, SOURCE)
        expected = encode_base32(base64.b64decode("AAAAAAAAAAAAAAAA"))
        self.assertEqual(record.totp_secret, expected)
        self.assertEqual(record.shared_secret_b64, "AAAAAAAAAAAAAAAA")

    def test_nul_bytes_are_stripped(self) -> None:
        clean = b'{"account_name":"bob","steamid":"123"}'
        raw = b"\x00".join(bytes([byte]) for byte in clean) + b"\x00\x00"
        record = parser.parse_secret_file(raw, SOURCE)
        self.assertEqual(record.account_name, "bob")
        self.assertEqual(record.numeric_id, "123")
        self.assertIsNone(record.totp_secret)

    def test_pattern_fallback_on_broken_json(self) -> None:
        raw = (
            b'garbage {"account_name" : "carol", "shared_secret":"AAAAAAAAAAAAAAAA", '
            b'"uri":"otpauth:\\/\\/totp\\/x?secret=MZXW6YTB&issuer=Steam" trailing'
        )
        record = parser.parse_secret_file(raw, SOURCE)
        self.assertEqual(record.account_name, "carol")
        self.assertEqual(record.totp_secret, "MZXW6YTB")
        self.assertEqual(record.raw_uri, "otpauth://totp/x?secret=MZXW6YTB&issuer=Steam")

    def test_secret_pattern_found_outside_fields(self) -> None:
        raw = b"not json at all secret=QWERTY234567 more"
        record = parser.parse_secret_file(raw, SOURCE)
        self.assertEqual(record.totp_secret, "QWERTY234567")
        self.assertTrue(record.found)

    def test_numeric_steamid_is_converted(self) -> None:
        raw = b'{"steamid": 76561198000000000, "account_name": "dave"}'
        record = parser.parse_secret_file(raw, SOURCE)
        self.assertEqual(record.numeric_id, "76561198000000000")

    def test_non_string_fields_are_absent(self) -> None:
        raw = b'{"account_name": true, "shared_secret": ["x"], "uri": null}'
        record = parser.parse_secret_file(raw, SOURCE)
        self.assertIsNone(record.account_name)
        self.assertIsNone(record.shared_secret_b64)
        self.assertFalse(record.found)

    def test_malformed_shared_secret_is_absent(self) -> None:
        fields = SecretFields(shared_secret="!!not-base64!!")
        self.assertIsNone(parser.secret_from_shared_secret(fields, ""))

    def test_uri_without_secret_param_falls_through(self) -> None:
        fields = SecretFields(
            uri="otpauth://totp/x?issuer=Steam",
            shared_secret="AAAAAAAAAAAAAAAA",
        )
        self.assertIsNone(parser.secret_from_uri(fields, ""))
        self.assertEqual(parser.derive_totp_secret(fields, ""), "A" * 20)

    def test_json_array_uses_pattern_strategy(self) -> None:
        text = '[{"account_name":"erin"}]'
        self.assertIsNone(parser.fields_from_json(text))
        self.assertEqual(parser.extract_fields(text).account_name, "erin")

    def test_json_without_known_keys_falls_back_to_patterns(self) -> None:
        text = '{"data": {"account_name": "gina", "uri": "otpauth:\\/\\/totp\\/x?secret=ABC234"}}'
        self.assertTrue(parser.fields_from_json(text).is_empty())
        fields = parser.extract_fields(text)
        self.assertEqual(fields.account_name, "gina")
        record = parser.parse_secret_file(text.encode(), SOURCE)
        self.assertEqual(record.totp_secret, "ABC234")

    def test_empty_file_yields_empty_record(self) -> None:
        record = parser.parse_secret_file(b"", SOURCE)
        self.assertFalse(record.found)
        self.assertEqual(record.source_path, SOURCE)

    def test_invalid_utf8_is_replaced(self) -> None:
        raw = b'{"account_name":"fr\xffank","shared_secret":"AAAAAAAAAAAAAAAA"}'
        record = parser.parse_secret_file(raw, SOURCE)
        self.assertEqual(record.account_name, "fr\ufffdank")
        self.assertEqual(record.totp_secret, "A" * 20)

    def test_strategies_are_injectable(self) -> None:
        fields = parser.extract_fields("{}", strategies=(lambda _text: None,))
        self.assertTrue(fields.is_empty())
        secret = parser.derive_totp_secret(
            SecretFields(),
            "",
            strategies=(lambda _f, _t: None, lambda _f, _t: "XYZ"),
        )
        self.assertEqual(secret, "XYZ")


if __name__ == "__main__":
    unittest.main()
