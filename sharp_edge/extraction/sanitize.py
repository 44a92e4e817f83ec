"""Strip markdown code fences from model replies."""

from __future__ import annotations

import re

# An opening fence may carry a language tag (```json, ```JSON5) directly
# before the payload.
_FENCE_RE = re.compile(r"```(?:[A-Za-z0-9_+-]+(?=[\s\[{]))?")


def sanitize(raw_text: str) -> str:
    """Remove fence markers and surrounding whitespace.

    Idempotent: ``sanitize(sanitize(x)) == sanitize(x)``.
    """
    return _FENCE_RE.sub("", raw_text).strip()
