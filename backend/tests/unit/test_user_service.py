"""Unit tests for the UserService."""

import pytest

from clinic.application.interfaces import ModelDelegate, PasswordHasher, UserRepository
from clinic.application.schemas import PatientCreate
from clinic.application.services import UserService
from clinic.domain.entities import Patient, QueryPlan, User, UserRole
from clinic.domain.exceptions import DuplicateEntityError, QueryConfigurationError


class FakeUserRepository(UserRepository):
    """In-memory fake repository for unit testing."""

    def __init__(self):
        self.users: dict[str, User] = {}
        self.patients: dict[str, Patient] = {}

    async def get_by_email(self, email: str) -> User | None:
        return self.users.get(email)

    async def create_patient(self, user: User, patient: Patient) -> Patient:
        self.users[user.email] = user
        self.patients[patient.email] = patient
        return patient


class FakePasswordHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


class RecordingDelegate(ModelDelegate):
    """Returns canned rows and remembers the plan it was asked to run."""

    def __init__(self, model_name: str, fields: set[str], rows: list[dict], total: int):
        self.model_name = model_name
        self.fields = fields
        self.rows = rows
        self.total = total
        self.plans: list[QueryPlan] = []
        self.count_calls: list[dict] = []

    async def count(self, where):
        self.count_calls.append(where)
        return self.total

    async def find_many(self, plan: QueryPlan):
        self.plans.append(plan)
        return self.rows

    def has_field(self, name: str) -> bool:
        return name in self.fields


USER_FIELDS = {"id", "email", "role", "status", "needPasswordChange", "createdAt"}
PATIENT_FIELDS = {"id", "name", "email", "contactNumber", "address", "isDeleted", "createdAt"}


@pytest.fixture
def repository() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def users() -> RecordingDelegate:
    return RecordingDelegate("User", USER_FIELDS, [{"email": "a@x.io"}], total=1)


@pytest.fixture
def patients() -> RecordingDelegate:
    rows = [{"name": "Ann"}, {"name": "Bob"}]
    return RecordingDelegate("Patient", PATIENT_FIELDS, rows, total=12)


@pytest.fixture
def service(repository, users, patients) -> UserService:
    return UserService(repository, FakePasswordHasher(), users, patients)


def patient_data(**overrides) -> PatientCreate:
    values = {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "password": "secret123",
        "contact_number": "555-0100",
    }
    values.update(overrides)
    return PatientCreate(**values)


@pytest.mark.asyncio
async def test_create_patient(service: UserService, repository: FakeUserRepository):
    patient = await service.create_patient(patient_data())

    assert patient.id is not None
    assert patient.name == "Jane Doe"
    assert patient.contact_number == "555-0100"
    assert patient.is_deleted is False

    user = repository.users["jane@example.com"]
    assert user.role == UserRole.PATIENT
    assert user.need_password_change is True


@pytest.mark.asyncio
async def test_create_patient_stores_hashed_password(service, repository):
    await service.create_patient(patient_data())

    assert repository.users["jane@example.com"].password == "hashed:secret123"


@pytest.mark.asyncio
async def test_create_patient_rejects_existing_email(service, repository):
    await service.create_patient(patient_data())

    with pytest.raises(DuplicateEntityError):
        await service.create_patient(patient_data(name="Someone Else"))
    assert len(repository.patients) == 1


@pytest.mark.asyncio
async def test_list_patients_runs_the_full_pipeline(service, patients):
    result = await service.list_patients(
        {"searchTerm": "an", "isDeleted": "false", "page": "2", "limit": "5", "sort": "name"}
    )

    plan = patients.plans[0]
    assert plan.where == {
        "AND": [
            {"isDeleted": False},
            {
                "OR": [
                    {"name": {"contains": "an", "mode": "insensitive"}},
                    {"email": {"contains": "an", "mode": "insensitive"}},
                    {"address": {"contains": "an", "mode": "insensitive"}},
                ]
            },
        ]
    }
    assert plan.order_by == [{"name": "asc"}]
    assert (plan.skip, plan.take) == (5, 5)
    assert patients.count_calls == [plan.where]

    assert result.data == [{"name": "Ann"}, {"name": "Bob"}]
    assert (result.meta.page, result.meta.limit) == (2, 5)
    assert (result.meta.total, result.meta.total_pages) == (12, 3)
    assert result.warnings == []


@pytest.mark.asyncio
async def test_list_patients_ignores_fields_outside_the_allowlist(service, patients):
    await service.list_patients({"name": "Ann", "email": "ann@x.io"})

    assert patients.plans[0].where == {"email": "ann@x.io"}


@pytest.mark.asyncio
async def test_list_users_uses_user_configuration(service, users):
    result = await service.list_users({"searchTerm": "admin", "role": "ADMIN"})

    assert users.plans[0].where == {
        "AND": [
            {"role": "ADMIN"},
            {"OR": [{"email": {"contains": "admin", "mode": "insensitive"}}]},
        ]
    }
    assert result.meta.total == 1


@pytest.mark.asyncio
async def test_list_reports_projection_conflict(service, patients):
    result = await service.list_patients({"fields": "name", "populate": "user"})

    plan = patients.plans[0]
    assert plan.include == {"user": True}
    assert plan.select is None
    assert len(result.warnings) == 1


@pytest.mark.asyncio
async def test_list_with_misconfigured_delegate_fails(repository):
    broken = RecordingDelegate("Patient", {"name"}, [], total=0)
    service = UserService(repository, FakePasswordHasher(), broken, broken)

    with pytest.raises(QueryConfigurationError):
        await service.list_patients({})
