import json
import sys

import typer

from .config import DEFAULT_ALLOWED_PREFIX, DEFAULT_SEPARATOR, Settings
from .logging import get_logger
from .stream import process_stream

logger = get_logger(__name__)

app = typer.Typer(help="gortail – goreplay middleware that tails traffic to stderr")


@app.command()
def run(
    prefix: str = typer.Option(DEFAULT_ALLOWED_PREFIX, "--prefix", "-p", help="Requests outside this path prefix are hidden along with their responses"),
    separator: str = typer.Option(DEFAULT_SEPARATOR, help="Line written before each frame on stderr"),
    strict_hex: bool = typer.Option(False, "--strict-hex/--lenient-hex", help="Reject malformed hex lines instead of decoding best-effort"),
    summary: bool = typer.Option(False, "--summary/--no-summary", help="Log line and frame counts when input ends"),
) -> None:
    """
    Echo hex-encoded frames from stdin to stdout and show decoded frames on stderr.

    Requests whose endpoint does not start with the prefix are hidden, as is the
    first response carrying the same tag. Runs until stdin is closed.
    """
    settings = Settings(allowed_prefix=prefix, separator=separator, strict_hex=strict_hex)

    logger.debug(f"Filtering frames outside {settings.allowed_prefix!r} (strict hex: {settings.strict_hex})")
    stats = process_stream(sys.stdin, sys.stdout, sys.stderr, settings=settings)

    if summary:
        logger.info(f"Processed {stats.lines_read} lines: {stats.frames_shown} shown, {stats.frames_hidden} hidden")
        if stats.decode_errors:
            logger.warning(f"Undecodable lines: {stats.decode_errors}")
        logger.info(f"Run summary: {json.dumps(stats.to_dict(), sort_keys=True)}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
