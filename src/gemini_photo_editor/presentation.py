"""Turning edited images into displayable and downloadable resources."""

from __future__ import annotations

from contextlib import suppress
import logging
import os
from pathlib import Path
import tempfile

from gemini_photo_editor.constants import DEFAULT_DOWNLOAD_PREFIX
from gemini_photo_editor.core.types import DisplayableImage, DownloadFile, EditedImage

log = logging.getLogger(__name__)


def to_displayable(image: EditedImage) -> DisplayableImage:
    """Wrap an edited image in a data URI that can be rendered directly."""
    return DisplayableImage(uri=f"data:{image.mime_type};base64,{image.image_data}")


def download_filename(
    displayable: DisplayableImage, prefix: str = DEFAULT_DOWNLOAD_PREFIX
) -> str:
    """``<prefix>-edit.<ext>``, with the extension taken from the media subtype."""
    return f"{prefix}-edit.{displayable.extension}"


def to_download(
    displayable: DisplayableImage, prefix: str = DEFAULT_DOWNLOAD_PREFIX
) -> DownloadFile:
    """Prepare the bytes and filename for the caller's save mechanism.

    Raises:
        ValueError: If the URI carries no decodable base64 payload.
    """
    return DownloadFile(
        filename=download_filename(displayable, prefix),
        data=displayable.payload_bytes(),
        mime_type=displayable.media_type,
    )


def save_download(download: DownloadFile, directory: str | Path) -> Path:
    """Write a download into ``directory`` and return the final path.

    Content goes to a temporary file next to the target first and is then
    renamed into place, so a partially written file never carries the final
    name. The temporary file is removed if anything fails.
    """
    target_dir = Path(directory)
    target = target_dir / download.filename
    fd, tmp_name = tempfile.mkstemp(
        dir=target_dir, prefix=f".{download.filename}.", suffix=".part"
    )
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(download.data)
        tmp_path.replace(target)
    except BaseException:
        with suppress(OSError):
            tmp_path.unlink()
        raise
    log.debug("Saved %d bytes to %s", len(download.data), target)
    return target
