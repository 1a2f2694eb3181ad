from dataclasses import dataclass

DEFAULT_ALLOWED_PREFIX = "/api"
DEFAULT_SEPARATOR = "==================="


@dataclass
class Settings:
    allowed_prefix: str = DEFAULT_ALLOWED_PREFIX
    separator: str = DEFAULT_SEPARATOR
    strict_hex: bool = False
