"""Plaintext pattern formats."""

from . import life106, rle
from .dataurl import from_data_url, to_data_url

__all__ = ["rle", "life106", "to_data_url", "from_data_url"]
