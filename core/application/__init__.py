"""Application layer - workflow services, collaborator interfaces and DTOs."""
