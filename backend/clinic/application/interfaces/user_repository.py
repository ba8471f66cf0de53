"""Abstract repository interface (port) for user and patient persistence."""

from abc import ABC, abstractmethod

from clinic.domain.entities import Patient, User


class UserRepository(ABC):
    """Port for user persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:
        """Retrieve a user by its unique e-mail."""
        ...

    @abstractmethod
    async def create_patient(self, user: User, patient: Patient) -> Patient:
        """Persist a user and its patient profile atomically; return the patient."""
        ...
