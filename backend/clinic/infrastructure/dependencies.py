"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.config import get_settings
from clinic.application.services import AuthService, UserService
from clinic.infrastructure.database.session import get_db_session
from clinic.infrastructure.database.models import PatientModel, UserModel
from clinic.infrastructure.database.query import SQLAlchemyModelDelegate
from clinic.infrastructure.database.repositories import SQLAlchemyUserRepository
from clinic.infrastructure.security import BcryptPasswordHasher, JwtTokenVerifier

# Never filterable, sortable, selectable or returned
HIDDEN_FIELDS = frozenset({"password"})


async def get_user_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[UserService, None]:
    """Provides a UserService with its repository, hasher and list delegates wired up."""
    settings = get_settings()
    yield UserService(
        repository=SQLAlchemyUserRepository(session),
        password_hasher=BcryptPasswordHasher(rounds=settings.bcrypt_rounds),
        users=SQLAlchemyModelDelegate(session, UserModel, hidden_fields=HIDDEN_FIELDS),
        patients=SQLAlchemyModelDelegate(session, PatientModel, hidden_fields=HIDDEN_FIELDS),
    )


async def get_auth_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AuthService, None]:
    """Provides an AuthService verifying tokens with the configured secret."""
    settings = get_settings()
    yield AuthService(
        token_verifier=JwtTokenVerifier(
            secret=settings.access_token_secret,
            algorithm=settings.jwt_algorithm,
        ),
        repository=SQLAlchemyUserRepository(session),
    )
