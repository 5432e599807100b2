"""Tests for LocalProofStorage."""

import pytest

from core.domain.exceptions import ValidationError
from core.infrastructure.storage import LocalProofStorage
from core.settings.sections import StorageSettings

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def storage(tmp_path) -> LocalProofStorage:
    return LocalProofStorage(StorageSettings(dir=str(tmp_path), max_proof_bytes=1024))


@pytest.mark.asyncio
async def test_save_writes_file_and_returns_public_reference(storage, tmp_path):
    reference = await storage.save("transfer.PNG", "image/png", PNG_BYTES)

    assert reference.startswith("/uploads/payments/payment_proof-")
    assert reference.endswith(".png")
    stored = tmp_path / "payments" / reference.rsplit("/", 1)[1]
    assert stored.read_bytes() == PNG_BYTES


@pytest.mark.asyncio
async def test_save_generates_unique_names(storage):
    first = await storage.save("a.png", "image/png", PNG_BYTES)
    second = await storage.save("a.png", "image/png", PNG_BYTES)
    assert first != second


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "filename,content_type,content",
    [
        ("proof.pdf", "application/pdf", b"%PDF-1.4"),
        ("proof", None, PNG_BYTES),
        ("proof.png", "image/jpeg", PNG_BYTES),
        ("proof.png", "image/png", b""),
        ("proof.png", "image/png", b"x" * 2048),
    ],
)
async def test_save_rejects_invalid_uploads(storage, tmp_path, filename, content_type, content):
    with pytest.raises(ValidationError):
        await storage.save(filename, content_type, content)
    assert not (tmp_path / "payments").exists() or not any((tmp_path / "payments").iterdir())


def test_max_bytes_follows_settings(storage):
    assert storage.max_bytes == 1024


@pytest.mark.asyncio
async def test_delete_removes_stored_proof(storage, tmp_path):
    reference = await storage.save("proof.webp", "image/webp", b"RIFF0000WEBP")
    await storage.delete(reference)
    assert not any((tmp_path / "payments").iterdir())


@pytest.mark.asyncio
async def test_delete_ignores_foreign_paths(storage, tmp_path):
    outside = tmp_path / "keep.txt"
    outside.write_text("keep")
    await storage.delete("/etc/passwd")
    await storage.delete("/uploads/other/keep.txt")
    assert outside.exists()
