"""Test configuration for pytest."""

import io
import logging

import pytest

from gortail.codec import encode_hex


@pytest.fixture(autouse=True)
def quiet_library_logging(monkeypatch):
    """Keep debug chatter from the codec and classifier out of captured stderr."""
    # stderr is the diagnostic channel under test, so only warnings may reach it
    monkeypatch.setenv('GORTAIL_LOG_LEVEL', 'WARNING')

    for logger_name in ['gortail.frame.classifier', 'gortail.codec.hex']:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


@pytest.fixture
def hex_lines():
    """Turn decoded frames into newline-terminated hex input lines."""
    def encode(*frames: str) -> list:
        return [encode_hex(frame) + "\n" for frame in frames]
    return encode


@pytest.fixture
def channels():
    """Primary and diagnostic streams for a processor."""
    return io.StringIO(), io.StringIO()
