# engine/ui/escape_codes.py
"""
Escape codes embedded in message text.

Authors write backslash codes (\\C[2], \\I[64], \\.); before layout they are
converted to ESC-prefixed sequences so the layout engine sees a single control
character and hands the rest of the sequence to the window.
"""
import re
from typing import Tuple

ESCAPE = "\x1b"

# A code is one symbol or a run of letters, optionally followed by [n]
ESCAPE_CODE_PATTERN = re.compile(r'^(?:[$.|^!><{}\\]|[A-Z]+)', re.IGNORECASE)
ESCAPE_PARAM_PATTERN = re.compile(r'^\[(\d+)\]')
ESCAPE_SEQUENCE_PATTERN = re.compile(r'\x1b(?:[$.|^!><{}\\]|[A-Z]+)(?:\[\d+\])?', re.IGNORECASE)


def convert_escape_characters(text: str) -> str:
    """Turns backslash codes into ESC codes. A doubled backslash stays a literal backslash."""
    text = text.replace("\\", ESCAPE)
    return text.replace(ESCAPE + ESCAPE, "\\")


def obtain_escape_code(text: str, index: int) -> Tuple[str, int]:
    """Reads the code name at index. Returns (CODE, new_index); ("", index) if none."""
    match = ESCAPE_CODE_PATTERN.match(text[index:])
    if not match:
        return "", index
    return match.group(0).upper(), index + len(match.group(0))


def obtain_escape_param(text: str, index: int) -> Tuple[int, int]:
    """Reads a [n] parameter at index. Returns (n, new_index); (-1, index) if none."""
    match = ESCAPE_PARAM_PATTERN.match(text[index:])
    if not match:
        return -1, index
    return int(match.group(1)), index + len(match.group(0))


def strip_escape_codes(text: str) -> str:
    """Removes ESC sequences and other control characters, leaving what gets drawn."""
    text = ESCAPE_SEQUENCE_PATTERN.sub('', text)
    return ''.join(c for c in text if ord(c) >= 0x20)
