"""Concrete repository implementation for users and patients backed by SQLAlchemy."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.application.interfaces import UserRepository
from clinic.domain.entities import Patient, User, UserRole, UserStatus
from clinic.infrastructure.database.models import PatientModel, UserModel


class SQLAlchemyUserRepository(UserRepository):
    """Implements the UserRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_email(self, email: str) -> User | None:
        result = await self._session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        model = result.scalar_one_or_none()
        return self._user_to_entity(model) if model else None

    async def create_patient(self, user: User, patient: Patient) -> Patient:
        user_model = UserModel(
            id=user.id,
            email=user.email,
            password=user.password,
            role=user.role.value,
            status=user.status.value,
            need_password_change=user.need_password_change,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        patient_model = PatientModel(
            id=patient.id,
            name=patient.name,
            email=patient.email,
            contact_number=patient.contact_number,
            address=patient.address,
            is_deleted=patient.is_deleted,
            created_at=patient.created_at,
            updated_at=patient.updated_at,
        )
        # Flushed in FK order; the owning session commits or rolls back both.
        self._session.add(user_model)
        await self._session.flush()
        self._session.add(patient_model)
        await self._session.flush()
        return self._patient_to_entity(patient_model)

    # ── Mapping ──────────────────────────────────────────────────────

    @staticmethod
    def _user_to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            email=model.email,
            password=model.password,
            role=UserRole(model.role),
            status=UserStatus(model.status),
            need_password_change=model.need_password_change,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _patient_to_entity(model: PatientModel) -> Patient:
        return Patient(
            id=model.id,
            name=model.name,
            email=model.email,
            contact_number=model.contact_number,
            address=model.address,
            is_deleted=model.is_deleted,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
