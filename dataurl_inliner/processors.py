# Imports
import logging
import os
from typing import List, Optional, Sequence, Union

from dataurl_inliner.constants import REFERENCE_PATTERN

logger = logging.getLogger(__name__)


# Extension normalization
def normalize_extensions(extensions: Optional[Union[str, Sequence[str]]]) -> List[str]:
    """Split comma separated input, then give every element a leading dot."""
    if not extensions:
        return []

    if isinstance(extensions, str):
        extensions = extensions.split(",") if "," in extensions else [extensions]

    normalized = []
    for ext in extensions:
        ext = ext.strip()
        if not ext:
            continue
        normalized.append(ext if ext.startswith(".") else f".{ext}")
    return normalized


def get_extension(reference: str) -> str:
    """File extension of a reference, query string removed."""
    return os.path.splitext(reference.split("?", 1)[0])[1]


# Reference extraction
class ReferenceExtractor:
    """Finds <img src> values and url() arguments in one left-to-right scan."""

    def __init__(self, pattern=REFERENCE_PATTERN):
        self._pattern = pattern

    def extract(self, content: str) -> List[str]:
        if not content:
            return []

        references = [
            match.group(1) or match.group(2)
            for match in self._pattern.finditer(content)
        ]

        logger.debug(f"Extracted {len(references)} references from content ({len(content)} chars)")
        return references
