"""Local-disk storage for payment-proof images."""

import logging
import secrets
import time
from pathlib import Path
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from core.application.interfaces import IProofStorage
from core.domain.exceptions import ValidationError
from core.settings.sections import StorageSettings

logger = logging.getLogger(__name__)

PROOF_SUBDIR = "payments"

# Declared MIME types accepted per extension
_MIME_TYPES = {
    "jpeg": {"image/jpeg"},
    "jpg": {"image/jpeg"},
    "png": {"image/png"},
    "webp": {"image/webp"},
}


class LocalProofStorage(IProofStorage):
    """
    Writes proofs to `<dir>/payments/` and returns public references
    of the form `<public_prefix>/payments/<file>`.

    Disk access runs in the threadpool so the event loop never blocks
    on file I/O.
    """

    def __init__(self, settings: StorageSettings) -> None:
        self._settings = settings
        self._root = Path(settings.dir)
        self._public_prefix = settings.public_prefix.rstrip("/")

    @property
    def max_bytes(self) -> int:
        return self._settings.max_proof_bytes

    async def save(self, filename: str, content_type: Optional[str], content: bytes) -> str:
        extension = self._validate(filename, content_type, content)

        stored_name = f"payment_proof-{int(time.time())}-{secrets.token_hex(6)}.{extension}"
        await run_in_threadpool(self._write, stored_name, content)

        reference = f"{self._public_prefix}/{PROOF_SUBDIR}/{stored_name}"
        logger.info(f"Stored payment proof {reference} ({len(content)} bytes)")
        return reference

    async def delete(self, reference: str) -> None:
        prefix = f"{self._public_prefix}/{PROOF_SUBDIR}/"
        if not reference.startswith(prefix):
            logger.warning(f"Refusing to delete proof outside storage: {reference}")
            return

        path = self._root / PROOF_SUBDIR / reference[len(prefix):]
        try:
            await run_in_threadpool(path.unlink)
            logger.info(f"Deleted payment proof {reference}")
        except FileNotFoundError:
            logger.warning(f"Payment proof already gone: {reference}")

    def _write(self, stored_name: str, content: bytes) -> None:
        target_dir = self._root / PROOF_SUBDIR
        target_dir.mkdir(parents=True, exist_ok=True)
        (target_dir / stored_name).write_bytes(content)

    def _validate(self, filename: str, content_type: Optional[str], content: bytes) -> str:
        """Return the normalized extension or raise ValidationError."""
        if not content:
            raise ValidationError("Payment proof file is required")

        extension = Path(filename or "").suffix.lstrip(".").lower()
        allowed = [ext.lower() for ext in self._settings.allowed_extensions]
        if extension not in allowed:
            raise ValidationError(
                f"Payment proof must be an image ({', '.join(allowed)})"
            )

        accepted_mime = _MIME_TYPES.get(extension)
        if content_type and accepted_mime and content_type.lower() not in accepted_mime:
            raise ValidationError(
                f"Payment proof content type {content_type} does not match .{extension}"
            )

        if len(content) > self.max_bytes:
            raise ValidationError(f"Payment proof exceeds the {self.max_bytes / 1_000_000:g} MB limit")

        return extension
