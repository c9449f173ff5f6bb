"""Authentication service - credential check and session establishment."""

from sqlalchemy.exc import SQLAlchemyError

from src.taskflow.core import messages
from src.taskflow.core.exceptions import UnauthorizedError
from src.taskflow.core.logging import get_logger
from src.taskflow.core.security import DUMMY_PASSWORD_HASH, verify_password
from src.taskflow.core.sessions import SessionStore
from src.taskflow.models import User
from src.taskflow.repositories import UserRepository
from src.taskflow.services.account_service import AccountService

logger = get_logger(__name__)


class AuthService:
    """Login and logout. Session enforcement lives in the API dependencies."""

    def __init__(
        self,
        user_repo: UserRepository,
        account_service: AccountService,
        session_store: SessionStore,
    ):
        self.user_repo = user_repo
        self.account_service = account_service
        self.session_store = session_store

    async def validate_credentials(self, email: str, password: str) -> User | None:
        """Return the user if ``password`` matches, otherwise None.

        Unknown email, lookup failure and wrong password are indistinguishable
        to the caller, and cost the same hash verification.
        """
        try:
            user = await self.user_repo.get_by_email(email) if email else None
        except SQLAlchemyError as e:
            logger.error(
                "Credential lookup failed",
                context="AuthService.validate_credentials",
                exc_info=e,
            )
            user = None

        password_hash = user.hashed_password if user else DUMMY_PASSWORD_HASH
        password_valid = verify_password(password, password_hash)

        if user is None or not password_valid:
            return None
        return user

    async def login(self, email: str, password: str) -> tuple[str, str]:
        """Authenticate and open a session.

        Returns:
            (session_id, welcome message)

        Raises:
            UnauthorizedError: invalid credentials, or the email is not verified yet
        """
        context = "AuthService.login"
        user = await self.validate_credentials(email, password)
        if user is None:
            logger.warning("Login rejected: invalid credentials", context=context)
            raise UnauthorizedError(messages.INVALID_CREDENTIALS, code="INVALID_CREDENTIALS")

        if not user.email_verified:
            logger.warning(
                "Login rejected: email not verified", context=context, user_id=str(user.id)
            )
            raise UnauthorizedError(messages.EMAIL_NOT_VERIFIED, code="EMAIL_NOT_VERIFIED")

        account = await self.account_service.find_by_email(user.email)
        session_id = await self.session_store.create(account.id)

        logger.info("Login succeeded", context=context, user_id=str(account.id))
        return session_id, messages.LOGIN_SUCCESSFUL.format(
            firstname=account.firstname, lastname=account.lastname
        )

    async def logout(self, session_id: str) -> str:
        await self.session_store.destroy(session_id)
        return messages.SESSION_ENDED
