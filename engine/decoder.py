"""
Decoding of Logpush request bodies into newline-delimited JSON records.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import gzip
import json
import logging
import re
import zlib
from typing import Any, Dict, List, Optional

log = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"
_GZIP_ENCODINGS = {"gzip", "x-gzip"}
_LINE_SPLIT = re.compile(r"\r?\n")


class BatchDecodeError(ValueError):
    pass


def is_gzip(body: bytes, content_encoding: Optional[str] = None) -> bool:
    encoding = (content_encoding or "").strip().lower()
    return encoding in _GZIP_ENCODINGS or body[:2] == GZIP_MAGIC


def read_body(body: bytes, content_encoding: Optional[str] = None) -> str:
    if is_gzip(body, content_encoding):
        try:
            body = gzip.decompress(body)
        except (OSError, EOFError, zlib.error) as exc:
            raise BatchDecodeError(f"cannot decompress gzip body: {exc}") from exc
    return body.decode("utf-8", errors="replace")


def parse_ndjson(text: str) -> List[Dict[str, Any]]:
    records: List[Dict[str, Any]] = []
    dropped = 0
    for line in _LINE_SPLIT.split(text):
        if not line.strip():
            continue
        try:
            record = json.loads(line)
        except ValueError:
            dropped += 1
            continue
        if isinstance(record, dict):
            records.append(record)
        else:
            dropped += 1
    if dropped:
        log.debug("Dropped %d malformed NDJSON lines", dropped)
    return records


def decode_batch(body: bytes, content_encoding: Optional[str] = None) -> List[Dict[str, Any]]:
    return parse_ndjson(read_body(body, content_encoding))
