"""
Frame parsing and classification.

Decoded frames are parsed into a typed header and classified into show/hide
decisions by a classifier that correlates requests with their responses.
"""

from .model import (
    Frame,
    Header,
    MalformedFrameError,
    PayloadType,
    extract_endpoint,
    parse_frame,
    parse_header,
)
from .classifier import Decision, FrameClassifier

__all__ = [
    "Decision",
    "Frame",
    "FrameClassifier",
    "Header",
    "MalformedFrameError",
    "PayloadType",
    "extract_endpoint",
    "parse_frame",
    "parse_header",
]
