# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Lossless project persistence in inline and folder form."""

from __future__ import annotations

from typing import Final

from .api import load_any, load_folder, load_inline, save_folder, save_inline
from .codec import decode_project, encode_project
from .content_store import REF_PATTERN, RefReader, RefWriter, compute_checksum
from .documents import ProjectDocument, dump_document, parse_document

__all__: Final[tuple[str, ...]] = (
    "REF_PATTERN",
    "ProjectDocument",
    "RefReader",
    "RefWriter",
    "compute_checksum",
    "decode_project",
    "dump_document",
    "encode_project",
    "load_any",
    "load_folder",
    "load_inline",
    "parse_document",
    "save_folder",
    "save_inline",
)
