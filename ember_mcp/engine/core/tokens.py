"""Token accounting for tool calls.

Tool results report how many tokens the call consumed (arguments) and
produced (response text), counted with tiktoken's ``cl100k_base``.

Counting is best-effort: tiktoken fetches the encoding file on first use,
and when that fails every count is 0 instead of failing the tool call.
"""

import json
import logging
from typing import Any

import tiktoken

logger = logging.getLogger(__name__)

ENCODING_NAME = "cl100k_base"

_encoding: tiktoken.Encoding | None = None
_encoding_failed = False


def get_encoder() -> tiktoken.Encoding | None:
    """Get or create the cl100k_base encoder (lazy initialization).

    Returns:
        The encoder, or None if it could not be loaded. The failure is
        logged once and not retried.
    """
    global _encoding, _encoding_failed
    if _encoding is None and not _encoding_failed:
        try:
            _encoding = tiktoken.get_encoding(ENCODING_NAME)
        except Exception as e:
            _encoding_failed = True
            logger.warning(f"Token counting disabled, could not load {ENCODING_NAME}: {e}")
    return _encoding


def count_tokens(text: str) -> int:
    """Count tokens in text.

    Args:
        text: Text to count tokens for

    Returns:
        Number of tokens; 0 for empty text or when no encoder is available
    """
    if not text:
        return 0
    encoder = get_encoder()
    if encoder is None:
        return 0
    return len(encoder.encode(text))


def count_argument_tokens(arguments: dict[str, Any]) -> int:
    """Count tokens of tool-call arguments as they were sent (compact JSON)."""
    if not arguments:
        return 0
    return count_tokens(json.dumps(arguments, separators=(",", ":"), default=str))
