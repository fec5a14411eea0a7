# Imports
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Union

from dataurl_inliner.pipeline import Document

logger = logging.getLogger(__name__)


# Implementation
class DocumentWriter:
    """Writes transformed documents to disk with atomic replace."""

    def __init__(self, output_dir: Optional[Union[str, Path]] = None):
        self._output_dir = Path(output_dir) if output_dir else None
        self._written: Dict[Path, str] = {}

    def target_for(self, document: Document) -> Path:
        source = Path(document.path)
        if self._output_dir is None:
            return source
        return self._output_dir / source.name

    def write(self, document: Document) -> Optional[Path]:
        """Write document contents atomically, return the target path."""
        if document.is_null:
            return None

        target = self.target_for(document)
        previous = self._written.get(target)
        if previous is not None and previous != document.path:
            logger.warning(f"{document.path} overwrites {previous} at {target}")
        self._written[target] = document.path
        target.parent.mkdir(parents=True, exist_ok=True)

        data = document.contents
        if isinstance(data, str):
            data = data.encode("utf-8")

        with tempfile.NamedTemporaryFile(
            "wb",
            dir=target.parent,
            suffix=".tmp",
            delete=False,
        ) as f:
            f.write(data)
            temp_path = f.name

        os.replace(temp_path, target)
        logger.debug(f"Saved {target}")
        return target
