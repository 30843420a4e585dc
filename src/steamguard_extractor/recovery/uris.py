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

from __future__ import annotations

from ..core.models import SecretRecord

ISSUER = "Steam"
STEAM_URI_PREFIX = "steam-uri"
OTPAUTH_URI_PREFIX = "otpauth-universal"

# Authenticator apps choke on these four inside the label; everything else is left alone.
_LABEL_ESCAPES = (
    (" ", "%20"),
    ("@", "%40"),
    (":", "%3A"),
    ("/", "%2F"),
)


def build_label(record: SecretRecord) -> str:
    if record.account_name:
        return f"{ISSUER}:{record.account_name}"
    if record.numeric_id:
        return f"{ISSUER}:{record.numeric_id}"
    return ISSUER


def encode_label(label: str) -> str:
    for char, escaped in _LABEL_ESCAPES:
        label = label.replace(char, escaped)
    return label


def steam_uri(secret: str) -> str:
    return f"steam://{secret}"


def otpauth_uri(record: SecretRecord) -> str:
    if not record.totp_secret:
        raise ValueError("record has no TOTP secret")
    label = encode_label(build_label(record))
    return f"otpauth://totp/{label}?secret={record.totp_secret}&issuer={ISSUER}"


def export_lines(record: SecretRecord) -> list[str]:
    if not record.totp_secret:
        return []
    return [
        f"{STEAM_URI_PREFIX}: {steam_uri(record.totp_secret)}",
        f"{OTPAUTH_URI_PREFIX}: {otpauth_uri(record)}",
    ]


def detail_rows(record: SecretRecord) -> list[tuple[str, str]]:
    candidates = (
        ("account_name", record.account_name),
        ("steamid", record.numeric_id),
        ("secret (TOTP)", record.totp_secret),
        ("uri (from file)", record.raw_uri),
        ("shared_secret", record.shared_secret_b64),
        ("identity_secret", record.identity_secret_b64),
    )
    return [(key, value) for key, value in candidates if value]
