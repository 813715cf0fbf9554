"""Small utilities shared across neurotick."""

from .logging import get_logger
