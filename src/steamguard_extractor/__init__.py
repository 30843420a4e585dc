"""Recover Steam Guard TOTP secrets from an Android backup of the legacy Steam app."""
