"""Hex codec for goreplay middleware lines."""

from .hex import DecodeError, HexDecoder, decode_hex, encode_hex, hex_to_bytes

__all__ = [
    "DecodeError",
    "HexDecoder",
    "decode_hex",
    "encode_hex",
    "hex_to_bytes",
]
