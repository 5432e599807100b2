"""File storage adapters."""

from .local_proof_storage import LocalProofStorage

__all__ = ["LocalProofStorage"]
