"""
Hex line decoding.

goreplay hands middleware each payload as one line of hex digits. The decoders
here turn such a line back into text. Two modes are supported:

- best-effort (default): a trailing odd character is dropped and every pair
  is read the way JavaScript's ``parseInt(pair, 16)`` reads it. Leading
  whitespace, a sign and a ``0x`` prefix are skipped, then the leading hex
  digits are taken. ``"a?"`` becomes ``0x0a``, ``" a"`` and ``"+a"`` become
  ``0x0a``, ``"-a"`` wraps to ``0xf6`` and ``"?a"`` becomes ``0x00``.
  Nothing is ever rejected.
- strict: odd length or any non-hex character raises :class:`DecodeError`.

Valid lines take the ``bytes.fromhex`` path in both modes; the pair-by-pair
reading only runs for lines that contain something other than hex digits.

Decoded bytes are interpreted as UTF-8; invalid sequences become U+FFFD.
"""

from __future__ import annotations

import codecs
import re
import string

from ..logging import get_logger

logger = get_logger(__name__)

_HEX_DIGITS = frozenset(string.hexdigits)
_HEX_LINE = re.compile(r"[0-9a-fA-F]*")
_NON_HEX = re.compile(r"[^0-9a-fA-F]")

# Characters JavaScript's parseInt skips before the number
_JS_WHITESPACE = (
    "\t\n\v\f\r \xa0\u1680\u2028\u2029\u202f\u205f\u3000\ufeff"
    + "".join(chr(c) for c in range(0x2000, 0x200b))
)


class DecodeError(ValueError):
    """Raised when a raw line is not valid hex (strict mode only)."""


def _pair_value(pair: str) -> int:
    """Byte value of one pair as ``parseInt(pair, 16)`` would give it, NaN mapping to 0."""
    rest = pair.lstrip(_JS_WHITESPACE)
    negative = rest[:1] == "-"
    if rest[:1] in ("-", "+"):
        rest = rest[1:]
    if rest[:2] in ("0x", "0X"):
        rest = rest[2:]

    digits = ""
    for char in rest:
        if char not in _HEX_DIGITS:
            break
        digits += char
    if not digits:
        return 0

    value = int(digits, 16)
    # Uint8 conversion wraps negatives
    return (-value if negative else value) & 0xFF


def hex_to_bytes(raw: str, strict: bool = False) -> bytes:
    """
    Convert a hex line to bytes.

    Args:
        raw: Hex digits, without the line terminator
        strict: Raise DecodeError instead of decoding best-effort

    Returns:
        Decoded bytes
    """
    if strict and len(raw) % 2:
        raise DecodeError(f"odd-length hex line ({len(raw)} characters)")

    usable = len(raw) - len(raw) % 2
    if usable != len(raw):
        logger.debug(f"Dropping trailing odd hex character from {len(raw)}-character line")

    digits = raw[:usable]
    # bytes.fromhex tolerates embedded whitespace, so only hand it clean lines
    if _HEX_LINE.fullmatch(digits):
        return bytes.fromhex(digits)

    if strict:
        bad = _NON_HEX.search(digits).group()
        raise DecodeError(f"invalid hex character {bad!r}")
    return bytes(_pair_value(digits[i:i + 2]) for i in range(0, usable, 2))


def decode_hex(raw: str, strict: bool = False) -> str:
    """Decode a single hex line to text, independent of any stream state."""
    return hex_to_bytes(raw, strict=strict).decode("utf-8", errors="replace")


def encode_hex(text: str) -> str:
    """Encode text as lower-case hex of its UTF-8 bytes."""
    return text.encode("utf-8").hex()


class HexDecoder:
    """
    Stream decoder that keeps UTF-8 state between lines.

    A multi-byte character whose bytes are split across two lines is held back
    and emitted with the line that completes it.
    """

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict
        self._utf8 = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def decode(self, raw: str) -> str:
        """Decode one hex line. Raises DecodeError only in strict mode."""
        return self._utf8.decode(hex_to_bytes(raw, strict=self.strict))

    def flush(self) -> str:
        """Return whatever is pending at end of stream (replacement chars for incomplete sequences)."""
        return self._utf8.decode(b"", final=True)
