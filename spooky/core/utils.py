from __future__ import annotations
import chardet  # type: ignore

# Characters trimmed from both ends of a reported value.
VALUE_TRIM_CHARS = " \t\r\n\"'`/\\"


def decode_content(data: bytes) -> str:
    """Decode fetched bytes: UTF-8 first, then the chardet guess, then lossy UTF-8."""
    if not data:
        return ""
    try:
        return data.decode("utf-8", errors="strict")
    except UnicodeDecodeError:
        pass
    enc = chardet.detect(data).get("encoding")
    if enc:
        try:
            return data.decode(enc, errors="strict")
        except (LookupError, UnicodeDecodeError):
            pass
    return data.decode("utf-8", errors="replace")


def clean_value(raw: str) -> str:
    value = raw.strip(VALUE_TRIM_CHARS)
    return value.replace('\\"', '"').replace("\\'", "'")


def line_number_of(content: str, *candidates: str) -> int:
    """1-based line of the first candidate found in ``content``; 1 if none is."""
    for needle in candidates:
        if not needle:
            continue
        idx = content.find(needle)
        if idx >= 0:
            return content.count("\n", 0, idx) + 1
    return 1
