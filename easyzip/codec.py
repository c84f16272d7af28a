from __future__ import annotations

import zipfile
from typing import Optional

from .constants import CODEC_NONE, CODEC_DEFLATE, DEFAULT_LEVEL


class Codec:
    """Maps an easyzip codec id onto the zipfile compression method."""

    def __init__(self, codec_id: int, level: Optional[int] = None):
        if codec_id not in (CODEC_NONE, CODEC_DEFLATE):
            # Unknown/unsupported codec: fail fast
            raise ValueError(f"unsupported codec id: {codec_id}")
        if level is not None and not 0 <= level <= 9:
            raise ValueError(f"compression level must be 0..9, got {level}")
        self.codec_id = codec_id
        self.level = level

    @property
    def compression(self) -> int:
        if self.codec_id == CODEC_NONE:
            return zipfile.ZIP_STORED
        return zipfile.ZIP_DEFLATED

    @property
    def compresslevel(self) -> Optional[int]:
        # Stored entries ignore the level
        if self.codec_id == CODEC_NONE:
            return None
        return self.level if self.level is not None else DEFAULT_LEVEL
