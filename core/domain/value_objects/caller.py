"""Authenticated caller, as handed over by the auth collaborator."""
from dataclasses import dataclass

from ..enums import UserRole


@dataclass(frozen=True)
class Caller:
    """Identity and role of the user making a request."""

    id: int
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_business(self) -> bool:
        return self.role == UserRole.BUSINESS
