"""
Typed view of a decoded goreplay frame.

A frame is newline-separated text. The first line is the payload header
written by goreplay::

    1 f45590522cd1838b4a0d5c5aab80b77929dea3b3 13923489726487326 1231

i.e. ``type tag [timing] [latency]``. For requests the second line is the
request line, whose target path is the endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional


class MalformedFrameError(ValueError):
    """Raised when a frame header or an expected component is missing or unparseable."""


class PayloadType(IntEnum):
    """Message kinds carried in the first header token."""
    REQUEST = 1
    RESPONSE = 2
    EVENT = 3  # replayed response, never correlated

    @classmethod
    def from_value(cls, value: int) -> Optional[PayloadType]:
        try:
            return cls(value)
        except ValueError:
            return None


def _optional_int(token: str) -> Optional[int]:
    try:
        return int(token)
    except ValueError:
        return None


@dataclass(frozen=True)
class Header:
    type: int
    tag: str
    timing: Optional[int] = None
    latency: Optional[int] = None

    @property
    def payload_type(self) -> Optional[PayloadType]:
        return PayloadType.from_value(self.type)


def parse_header(line: str) -> Header:
    """
    Parse a payload header line.

    Args:
        line: First line of a frame

    Returns:
        Header with integer type and string tag

    Raises:
        MalformedFrameError: If the type or tag token is missing, or the type is not an integer
    """
    tokens = line.split()
    if len(tokens) < 2:
        raise MalformedFrameError(f"header needs type and tag, got {len(tokens)} token(s): {line!r}")

    try:
        payload_type = int(tokens[0])
    except ValueError as exc:
        raise MalformedFrameError(f"non-numeric payload type {tokens[0]!r}") from exc

    return Header(
        type=payload_type,
        tag=tokens[1],
        timing=_optional_int(tokens[2]) if len(tokens) > 2 else None,
        latency=_optional_int(tokens[3]) if len(tokens) > 3 else None,
    )


def extract_endpoint(request_line: str) -> str:
    """
    Return the target path of a request line.

    The second token is used when it is a path. Otherwise the first later
    token starting with ``/`` wins, falling back to the second token.
    """
    tokens = request_line.split()
    if len(tokens) < 2:
        raise MalformedFrameError(f"request line has no endpoint: {request_line!r}")

    candidate = tokens[1]
    if candidate.startswith("/"):
        return candidate
    for token in tokens[2:]:
        if token.startswith("/"):
            return token
    return candidate


@dataclass
class Frame:
    """A decoded frame split into its newline-separated components."""
    text: str
    components: List[str] = field(init=False)

    def __post_init__(self) -> None:
        self.components = self.text.split("\n")

    @property
    def header(self) -> Header:
        return parse_header(self.components[0])

    def endpoint(self) -> str:
        """Endpoint of a request frame; raises MalformedFrameError when the request line is missing."""
        if len(self.components) < 2:
            raise MalformedFrameError("request frame has no request line")
        return extract_endpoint(self.components[1])


def parse_frame(text: str) -> Frame:
    return Frame(text)
