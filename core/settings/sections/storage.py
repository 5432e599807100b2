from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """
    Payment-proof upload settings.

    UPLOAD_DIR is the filesystem root; stored references are public
    paths under UPLOAD_PUBLIC_PREFIX (e.g. /uploads/payments/...).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="UPLOAD_",
        extra="ignore",
    )

    dir: str = "./uploads"
    public_prefix: str = "/uploads"
    max_proof_bytes: int = 5_000_000  # 5 MB
    allowed_extensions: List[str] = ["jpeg", "jpg", "png", "webp"]
