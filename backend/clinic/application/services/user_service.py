"""Application service (use case) for user and patient operations."""

import asyncio
import logging

from clinic.application.constants import PATIENT_QUERY_CONFIG, USER_QUERY_CONFIG
from clinic.application.interfaces import ModelDelegate, PasswordHasher, UserRepository
from clinic.application.query import QueryBuilder, QueryBuilderConfig, QueryParameters
from clinic.application.schemas.user import PatientCreate
from clinic.domain.entities import PaginatedResult, Patient, User, UserRole
from clinic.domain.exceptions import DuplicateEntityError

logger = logging.getLogger(__name__)


class UserService:
    """Orchestrates user/patient registration and listing. Depends on ports (DI)."""

    def __init__(
        self,
        repository: UserRepository,
        password_hasher: PasswordHasher,
        users: ModelDelegate,
        patients: ModelDelegate,
    ):
        self._repository = repository
        self._password_hasher = password_hasher
        self._users = users
        self._patients = patients

    async def create_patient(self, data: PatientCreate) -> Patient:
        """Create the login account and the patient profile in one transaction."""
        if await self._repository.get_by_email(data.email) is not None:
            raise DuplicateEntityError("User", "email", data.email)

        # bcrypt is CPU-bound; keep it off the event loop
        hashed = await asyncio.to_thread(self._password_hasher.hash, data.password)

        user = User(email=data.email, password=hashed, role=UserRole.PATIENT)
        patient = Patient(
            name=data.name,
            email=data.email,
            contact_number=data.contact_number,
            address=data.address,
        )
        created = await self._repository.create_patient(user, patient)
        logger.info("Created patient %s for %s", created.id, created.email)
        return created

    async def list_users(self, params: QueryParameters) -> PaginatedResult:
        return await _run_list_query(self._users, params, USER_QUERY_CONFIG)

    async def list_patients(self, params: QueryParameters) -> PaginatedResult:
        return await _run_list_query(self._patients, params, PATIENT_QUERY_CONFIG)


async def _run_list_query(
    delegate: ModelDelegate,
    params: QueryParameters,
    config: QueryBuilderConfig,
) -> PaginatedResult:
    builder = (
        QueryBuilder(delegate, params, config)
        .filter()
        .search()
        .sort()
        .paginate()
        .fields()
        .populate()
        .date_wise()
    )
    plan = builder.get_plan()
    data = await delegate.find_many(plan)
    meta = await builder.get_meta()
    return PaginatedResult(data=data, meta=meta, warnings=plan.warnings)
