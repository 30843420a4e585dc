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

"""Locating, parsing and formatting Steam Guard secrets."""

from .discovery import discover_secrets, find_candidate_files, locate_files_dir
from .parser import parse_secret_file
from .uris import build_label, encode_label, export_lines, otpauth_uri, steam_uri

__all__ = [
    "build_label",
    "discover_secrets",
    "encode_label",
    "export_lines",
    "find_candidate_files",
    "locate_files_dir",
    "otpauth_uri",
    "parse_secret_file",
    "steam_uri",
]
