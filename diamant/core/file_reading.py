# diamant/core/file_reading.py

"""
File reading utilities for Diamant.

Component files in a consumer project may have been re-saved by an editor
with a BOM or a different encoding; they are read with encoding detection
so that comparison against the templates only sees real changes.
"""

from pathlib import Path

import chardet

def _normalize(text: str) -> str:
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text.replace("\x00", "")

def read_source_file_smart(path: Path) -> str:
    """
    Read a source file with the correct encoding (UTF-8, UTF-16, etc.)
    and normalise line endings.

    Args:
        path: Path to file

    Returns:
        File content as string with normalized line endings
    """
    raw = path.read_bytes()

    # UTF-8 first; UTF-16 only when a BOM says so
    if raw.startswith((b"\xff\xfe", b"\xfe\xff")):
        try:
            return _normalize(raw.decode("utf-16"))
        except UnicodeDecodeError:
            pass
    try:
        return _normalize(raw.decode("utf-8-sig"))
    except UnicodeDecodeError:
        pass

    # Fallback to chardet detection
    detected = chardet.detect(raw)
    encoding = detected["encoding"] or "utf-8"
    try:
        return _normalize(raw.decode(encoding))
    except (UnicodeDecodeError, LookupError):
        pass

    # Last resort: force UTF-8 with replacement
    return _normalize(raw.decode("utf-8", errors="replace"))
