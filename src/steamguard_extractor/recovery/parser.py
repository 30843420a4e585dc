#!/usr/bin/env python3
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

"""Tolerant parsing of Steamguard-* files.

The legacy app stores one JSON object per account, but files pulled out of a
backup are often padded with NUL bytes or partially corrupted. Fields are
recovered with a chain of strategies; anything that cannot be recovered is
reported as ``None`` instead of raising.
"""

from __future__ import annotations

import base64
import binascii
import json
import re
from collections.abc import Callable, Sequence
from pathlib import Path
from urllib.parse import parse_qs, urlparse

from ..core.models import SecretFields, SecretRecord
from ..encoding.base32 import encode_base32

FIELD_KEYS = ("uri", "account_name", "steamid", "shared_secret", "identity_secret")
_SECRET_PARAM_RE = re.compile(r"secret=([A-Z2-7]+)")

FieldStrategy = Callable[[str], SecretFields | None]
SecretStrategy = Callable[[SecretFields, str], str | None]


def clean_secret_text(raw: bytes) -> str:
    return raw.replace(b"\x00", b"").decode("utf-8", errors="replace")


def _field_pattern(key: str) -> re.Pattern[str]:
    return re.compile(rf'"{re.escape(key)}"\s*:\s*"([^"]*)"')


_FIELD_PATTERNS = {key: _field_pattern(key) for key in FIELD_KEYS}


def _normalize_value(value: object) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value or None
    return None


def fields_from_json(text: str) -> SecretFields | None:
    try:
        data = json.loads(text)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    return SecretFields(**{key: _normalize_value(data.get(key)) for key in FIELD_KEYS})


def fields_from_patterns(text: str) -> SecretFields | None:
    values: dict[str, str | None] = {}
    for key, pattern in _FIELD_PATTERNS.items():
        match = pattern.search(text)
        values[key] = (match.group(1) or None) if match else None
    return SecretFields(**values)


FIELD_STRATEGIES: tuple[FieldStrategy, ...] = (fields_from_json, fields_from_patterns)


def unescape_uri(uri: str) -> str:
    return uri.replace("\\/", "/")


def secret_from_uri(fields: SecretFields, _text: str) -> str | None:
    if not fields.uri:
        return None
    query = urlparse(unescape_uri(fields.uri)).query
    values = parse_qs(query).get("secret")
    if not values:
        return None
    return values[0] or None


def secret_from_text(_fields: SecretFields, text: str) -> str | None:
    match = _SECRET_PARAM_RE.search(text)
    return match.group(1) if match else None


def secret_from_shared_secret(fields: SecretFields, _text: str) -> str | None:
    if not fields.shared_secret:
        return None
    try:
        raw = base64.b64decode(fields.shared_secret)
    except (binascii.Error, ValueError):
        return None
    return encode_base32(raw) or None


SECRET_STRATEGIES: tuple[SecretStrategy, ...] = (
    secret_from_uri,
    secret_from_text,
    secret_from_shared_secret,
)


def extract_fields(
    text: str,
    strategies: Sequence[FieldStrategy] = FIELD_STRATEGIES,
) -> SecretFields:
    for strategy in strategies:
        fields = strategy(text)
        if fields is not None and not fields.is_empty():
            return fields
    return SecretFields()


def derive_totp_secret(
    fields: SecretFields,
    text: str,
    strategies: Sequence[SecretStrategy] = SECRET_STRATEGIES,
) -> str | None:
    for strategy in strategies:
        secret = strategy(fields, text)
        if secret:
            return secret
    return None


def parse_secret_file(raw: bytes, source_path: str | Path) -> SecretRecord:
    text = clean_secret_text(raw)
    fields = extract_fields(text)
    return SecretRecord(
        source_path=Path(source_path),
        account_name=fields.account_name,
        numeric_id=fields.steamid,
        raw_uri=unescape_uri(fields.uri) if fields.uri else None,
        shared_secret_b64=fields.shared_secret,
        identity_secret_b64=fields.identity_secret,
        totp_secret=derive_totp_secret(fields, text),
    )
