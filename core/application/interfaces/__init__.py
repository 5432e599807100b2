"""Application layer interfaces."""
from abc import ABC, abstractmethod
from typing import Optional

from core.domain.entities import Business, BusinessPaymentMethod, SparePart


class ICatalogLookup(ABC):
    """
    Interface for read access to the catalog collaborator.

    The order workflow resolves spare parts, businesses and payment
    methods through this contract without depending on how the
    catalog stores them.
    """

    @abstractmethod
    async def get_spare_part(self, spare_part_id: int) -> Optional[SparePart]:
        """
        Get current price, stock, owner and status of a spare part.

        Args:
            spare_part_id: Spare part identifier

        Returns:
            SparePart if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_business_for_user(self, user_id: int) -> Optional[Business]:
        """
        Get the business owned by a user.

        Args:
            user_id: User identifier

        Returns:
            Business if the user owns one, None otherwise
        """
        pass

    @abstractmethod
    async def get_payment_method(self, payment_method_id: int) -> Optional[BusinessPaymentMethod]:
        pass


class IProofStorage(ABC):
    """
    Interface for the file-upload collaborator.

    Stores a payment-proof image and hands back a path reference; the
    workflow keeps only that reference.
    """

    @property
    @abstractmethod
    def max_bytes(self) -> int:
        """Largest accepted proof, in bytes."""
        pass

    @abstractmethod
    async def save(self, filename: str, content_type: Optional[str], content: bytes) -> str:
        """
        Store an uploaded payment proof.

        Args:
            filename: Original client file name
            content_type: Declared MIME type
            content: File bytes

        Returns:
            Public path reference, e.g. /uploads/payments/payment_proof-1700000000-ab12cd.png

        Raises:
            ValidationError: If the file is not an accepted image or is too large
        """
        pass

    @abstractmethod
    async def delete(self, reference: str) -> None:
        """Remove a stored proof (used when the surrounding transition fails)."""
        pass
