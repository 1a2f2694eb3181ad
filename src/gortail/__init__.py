"""
gortail: a goreplay middleware that tails captured traffic.

Hex-encoded frames are read from stdin and echoed to stdout; decoded frames
are written to stderr unless they belong to requests outside the allowed API
path prefix.
"""

__version__ = "0.1.0"

from .codec import DecodeError, HexDecoder, decode_hex, encode_hex
from .config import Settings
from .frame import Decision, FrameClassifier, Header, MalformedFrameError, PayloadType, parse_frame
from .stream import StreamProcessor, StreamStats, process_stream

__all__ = [
    "Decision",
    "DecodeError",
    "FrameClassifier",
    "Header",
    "HexDecoder",
    "MalformedFrameError",
    "PayloadType",
    "Settings",
    "StreamProcessor",
    "StreamStats",
    "decode_hex",
    "encode_hex",
    "parse_frame",
    "process_stream",
]
