"""
Frame classifier deciding which frames reach the diagnostic stream.

Requests whose endpoint falls outside the allowed path prefix are hidden, and
so is the first response carrying the same tag. Everything else is shown,
including frames that cannot be parsed.
"""

from dataclasses import dataclass
from typing import FrozenSet, Literal, Optional, Set, Union

from ..config import DEFAULT_ALLOWED_PREFIX
from ..logging import get_logger
from .model import Frame, Header, MalformedFrameError, PayloadType, parse_frame

logger = get_logger(__name__)

Reason = Literal[
    "event",
    "allowed-endpoint",
    "suppressed-request",
    "suppressed-response",
    "unmatched-response",
    "unknown-type",
    "malformed",
]


@dataclass(frozen=True)
class Decision:
    """Outcome of classifying one frame."""
    show: bool
    reason: Reason
    header: Optional[Header] = None
    endpoint: Optional[str] = None


class FrameClassifier:
    """
    Stateful frame filter correlating requests and responses by tag.

    Per tag the lifecycle is ``unseen -> suppressed`` on a request to a
    disallowed endpoint, and back to ``unseen`` on the first response with
    that tag. There is no expiry: a suppressed request whose response never
    arrives keeps its tag for the lifetime of the classifier.
    """

    def __init__(self, allowed_prefix: str = DEFAULT_ALLOWED_PREFIX):
        """
        Initialize the classifier.

        Args:
            allowed_prefix: Requests whose endpoint starts with this prefix are shown
        """
        self.allowed_prefix = allowed_prefix
        self._suppressed: Set[str] = set()

    def __len__(self) -> int:
        return len(self._suppressed)

    @property
    def suppressed_tags(self) -> FrozenSet[str]:
        """Snapshot of tags currently hidden pending their response."""
        return frozenset(self._suppressed)

    def is_suppressed(self, tag: str) -> bool:
        return tag in self._suppressed

    def classify(self, frame: Union[str, Frame]) -> Decision:
        """
        Classify a decoded frame.

        Args:
            frame: Decoded frame text or an already parsed Frame

        Returns:
            Decision; never raises for malformed input
        """
        if isinstance(frame, str):
            frame = parse_frame(frame)

        try:
            return self._decide(frame)
        except MalformedFrameError as exc:
            logger.debug(f"Showing malformed frame: {exc}")
            return Decision(show=True, reason="malformed")

    def should_output_line(self, frame: Union[str, Frame]) -> bool:
        """Return True if the frame should be written to the diagnostic stream."""
        return self.classify(frame).show

    def _decide(self, frame: Frame) -> Decision:
        header = frame.header
        payload_type = header.payload_type

        if payload_type is PayloadType.EVENT:
            return Decision(show=True, reason="event", header=header)

        if payload_type is PayloadType.REQUEST:
            endpoint = frame.endpoint()
            if endpoint.startswith(self.allowed_prefix):
                return Decision(show=True, reason="allowed-endpoint", header=header, endpoint=endpoint)
            self._suppressed.add(header.tag)
            logger.debug(f"Suppressing {header.tag}: {endpoint} outside {self.allowed_prefix}")
            return Decision(show=False, reason="suppressed-request", header=header, endpoint=endpoint)

        if payload_type is PayloadType.RESPONSE:
            if header.tag in self._suppressed:
                self._suppressed.discard(header.tag)
                logger.debug(f"Hiding response {header.tag} (latency: {header.latency})")
                return Decision(show=False, reason="suppressed-response", header=header)
            return Decision(show=True, reason="unmatched-response", header=header)

        return Decision(show=True, reason="unknown-type", header=header)
