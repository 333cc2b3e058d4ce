"""Share links — encode the garden into a URL fragment and back."""

from .codec import (
    RestoreParseError, ShareState, cell_key, decode, encode, fragment_for,
    parse_cell_key, parse_state, share_url, state_to_dict, token_from_fragment,
)
from .link import ClipboardError, Location, MemoryLocation, ShareLinkSync, copy_share_url

__all__ = [
    # Codec
    "RestoreParseError", "ShareState", "cell_key", "decode", "encode",
    "fragment_for", "parse_cell_key", "parse_state", "share_url",
    "state_to_dict", "token_from_fragment",
    # Persistence
    "ClipboardError", "Location", "MemoryLocation", "ShareLinkSync",
    "copy_share_url",
]
