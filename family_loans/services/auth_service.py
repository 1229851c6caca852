import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from family_loans.core.exceptions import (
    DuplicateTenantException,
    InvalidCredentialsException,
    ValidationException,
)
from family_loans.core.security import DUMMY_PASSWORD_HASH, hash_password, verify_password
from family_loans.models.tenant import Tenant
from family_loans.models.tenant_context import TenantContext
from family_loans.repositories.tenant_repository import TenantRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Registers family accounts and checks their passwords"""

    def __init__(self, db: Session):
        self.db = db
        self.tenant_repo = TenantRepository(db)

    @staticmethod
    def _require_credentials(family_name: str | None, password: str | None) -> str:
        family_name = (family_name or "").strip()
        if not family_name or not password:
            raise ValidationException("Family name and password are required")
        return family_name

    def register(self, family_name: str, password: str) -> TenantContext:
        """
        Create a new family account.

        Args:
            family_name: Login handle, unique and case-sensitive
            password: Plaintext password; only its hash is stored

        Returns:
            Context for the new tenant

        Raises:
            ValidationException: If name or password is empty
            DuplicateTenantException: If the family name is taken
        """
        family_name = self._require_credentials(family_name, password)

        if self.tenant_repo.get_by_family_name(family_name) is not None:
            logger.info("Registration rejected: family name already exists")
            raise DuplicateTenantException()

        tenant = Tenant(family_name=family_name, password_hash=hash_password(password))
        try:
            tenant = self.tenant_repo.create(tenant)
        except IntegrityError:
            # Lost a race with a concurrent registration of the same name
            self.db.rollback()
            logger.info("Registration rejected: family name already exists")
            raise DuplicateTenantException()

        logger.info("Registered tenant %s", tenant.id)
        return TenantContext(tenant_id=tenant.id, family_name=tenant.family_name)

    def verify(self, family_name: str, password: str) -> TenantContext:
        """
        Check login credentials.

        Unknown family name and wrong password raise the same error.

        Raises:
            ValidationException: If name or password is empty
            InvalidCredentialsException: If credentials don't match a tenant
        """
        family_name = self._require_credentials(family_name, password)

        tenant = self.tenant_repo.get_by_family_name(family_name)
        if tenant is None:
            verify_password(password, DUMMY_PASSWORD_HASH)
            logger.info("Login failed: invalid credentials")
            raise InvalidCredentialsException()

        if not verify_password(password, tenant.password_hash):
            logger.info("Login failed: invalid credentials")
            raise InvalidCredentialsException()

        logger.info("Tenant %s logged in", tenant.id)
        return TenantContext(tenant_id=tenant.id, family_name=tenant.family_name)
