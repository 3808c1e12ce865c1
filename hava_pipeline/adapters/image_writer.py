"""Filesystem adapter for exported image persistence."""

from __future__ import annotations

from pathlib import Path

from .interfaces import ImageWriterPort


class FileSystemImageWriter(ImageWriterPort):
    """Write exported images to the local filesystem."""

    def adapter_write_image(self, image_path: str, payload_bytes: bytes) -> None:
        """Create missing parent folders and write image bytes.

        Args:
            image_path: Destination file path, existing files are overwritten.
            payload_bytes: Image payload.

        Returns:
            None: Writes file as side effect.

        Raises:
            OSError: Raised when the directory or file cannot be written.
        """

        target_path = Path(image_path)
        target_path.parent.mkdir(parents=True, exist_ok=True)
        target_path.write_bytes(payload_bytes)
