"""
Line plumbing between stdin, the classifier and the two output streams.

Every raw line is echoed unchanged to the primary stream. Frames the
classifier shows are written to the diagnostic stream as a separator line
followed by the decoded text.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, TextIO

from .codec import DecodeError, HexDecoder
from .config import Settings
from .frame import FrameClassifier
from .logging import get_logger

logger = get_logger(__name__)


@dataclass
class StreamStats:
    """Running counters for one processed stream."""
    lines_read: int = 0
    frames_shown: int = 0
    frames_hidden: int = 0
    decode_errors: int = 0
    reasons: Dict[str, int] = field(default_factory=dict)
    pending_tags: int = 0

    @property
    def malformed_frames(self) -> int:
        return self.reasons.get("malformed", 0)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "lines_read": self.lines_read,
            "frames_shown": self.frames_shown,
            "frames_hidden": self.frames_hidden,
            "malformed_frames": self.malformed_frames,
            "decode_errors": self.decode_errors,
            "pending_tags": self.pending_tags,
            "reasons": dict(self.reasons),
        }


def _strip_terminator(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def write_diagnostic(err: TextIO, text: str, separator: str) -> None:
    err.write(f"{separator}\n{text}\n")
    err.flush()


class StreamProcessor:
    """
    Processes raw hex lines one at a time.

    Holds the stream state: the UTF-8 decoder carrying partial characters
    between lines and the classifier carrying suppressed tags.
    """

    def __init__(self,
                 out: TextIO,
                 err: TextIO,
                 settings: Optional[Settings] = None,
                 classifier: Optional[FrameClassifier] = None):
        self.out = out
        self.err = err
        self.settings = settings if settings is not None else Settings()
        if classifier is None:
            classifier = FrameClassifier(allowed_prefix=self.settings.allowed_prefix)
        self.classifier = classifier
        self.decoder = HexDecoder(strict=self.settings.strict_hex)
        self.stats = StreamStats()

    def process_line(self, line: str) -> Optional[bool]:
        """
        Echo, decode and classify one input line.

        Args:
            line: Raw input line, with or without its terminator

        Returns:
            Whether the frame was shown, or None if the line could not be decoded
        """
        raw = _strip_terminator(line)
        self.stats.lines_read += 1

        self.out.write(raw + "\n")
        self.out.flush()

        try:
            text = self.decoder.decode(raw)
        except DecodeError as exc:
            self.stats.decode_errors += 1
            logger.warning(f"Skipping undecodable line {self.stats.lines_read}: {exc}")
            return None

        decision = self.classifier.classify(text)
        self.stats.reasons[decision.reason] = self.stats.reasons.get(decision.reason, 0) + 1
        if decision.show:
            self.stats.frames_shown += 1
            write_diagnostic(self.err, text, self.settings.separator)
        else:
            self.stats.frames_hidden += 1
        return decision.show

    def finish(self) -> StreamStats:
        """Close out the stream at end of input and return the final counters."""
        leftover = self.decoder.flush()
        if leftover:
            logger.debug(f"Discarding {len(leftover)} undecoded character(s) at end of input")
        self.stats.pending_tags = len(self.classifier)
        return self.stats


def process_stream(lines: Iterable[str],
                   out: TextIO,
                   err: TextIO,
                   settings: Optional[Settings] = None,
                   classifier: Optional[FrameClassifier] = None) -> StreamStats:
    """
    Run every line of an input stream through the filter until it ends.

    Args:
        lines: Raw hex lines, e.g. a text file object
        out: Primary stream receiving the verbatim echo
        err: Diagnostic stream receiving shown frames
        settings: Filter settings, defaults to Settings()
        classifier: Classifier to use, a fresh one is built from settings if omitted

    Returns:
        StreamStats for the processed input
    """
    processor = StreamProcessor(out, err, settings=settings, classifier=classifier)
    for line in lines:
        processor.process_line(line)
    return processor.finish()
