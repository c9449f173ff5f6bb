"""Account lifecycle - registration, verification, lookup, deletion, password reset.

Account states: registered (unverified) -> verified -> deleted.

Verification, forgot-password and reset-password deliberately answer with
the same message whether or not the target account exists.
"""

import asyncio
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.taskflow.core import messages
from src.taskflow.core.exceptions import (
    ConflictError,
    InternalError,
    NotFoundError,
    UnavailableError,
    ValidationError,
)
from src.taskflow.core.logging import get_logger, sanitize
from src.taskflow.core.notifications import send_reset_password_email, send_verification_email
from src.taskflow.core.security import (
    TokenType,
    create_verification_token,
    decode_token,
    hash_password,
)
from src.taskflow.models import GlobalRole, User
from src.taskflow.models.base import utc_now
from src.taskflow.repositories import UserRepository
from src.taskflow.schemas.auth import ForgotPasswordRequest, RegisterRequest, ResetPasswordRequest
from src.taskflow.schemas.user import UserDetailRead
from src.taskflow.services.reset_token_service import ResetTokenService

logger = get_logger(__name__)


def parse_user_id(value: str | UUID) -> UUID:
    """Parse a user id from a path segment.

    Raises:
        ValidationError: the value is not a well-formed identifier
    """
    if isinstance(value, UUID):
        return value
    try:
        return UUID(value)
    except ValueError as e:
        raise ValidationError(messages.INVALID_USER_ID, code="INVALID_USER_ID") from e


class AccountService:
    """Owns the account state machine and the password reset flow."""

    def __init__(
        self,
        user_repo: UserRepository,
        reset_token_service: ResetTokenService,
        session: AsyncSession,
    ):
        self.user_repo = user_repo
        self.reset_token_service = reset_token_service
        self.session = session

    async def _get_user(self, user_id: UUID, context: str) -> User | None:
        try:
            return await self.user_repo.get_by_id(user_id)
        except SQLAlchemyError as e:
            logger.error("User lookup failed", context=context, user_id=str(user_id), exc_info=e)
            raise InternalError() from e

    async def _commit(self, context: str, **log_fields: object) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to persist account change", context=context, exc_info=e, **log_fields
            )
            raise InternalError() from e

    async def register_user(self, data: RegisterRequest) -> str:
        """Create an unverified account and email its verification link.

        Raises:
            ValidationError: missing fields (all listed, in declaration order) or
                password confirmation mismatch
            ConflictError: the email is already registered
            InternalError: the account could not be stored
            UnavailableError: the account was stored but the email could not be sent.
                The unverified account is kept.
        """
        context = "AccountService.register_user"
        log_input = sanitize(data.model_dump())

        missing = data.missing_fields()
        if missing:
            logger.warning(
                "Registration rejected", context=context, input=log_input, missing=missing
            )
            raise ValidationError(
                messages.MISSING_PROPERTIES.format(fields=", ".join(missing)),
                code="MISSING_PROPERTIES",
            )
        email = data.email or ""
        password = data.password or ""

        try:
            email_taken = await self.user_repo.exists_by_email(email)
        except SQLAlchemyError as e:
            logger.error(
                "Registration lookup failed", context=context, input=log_input, exc_info=e
            )
            raise InternalError() from e
        if email_taken:
            logger.warning("Registration rejected: email taken", context=context, input=log_input)
            raise ConflictError(messages.EMAIL_ALREADY_REGISTERED, code="EMAIL_ALREADY_REGISTERED")

        if password != data.password_confirmation:
            logger.warning(
                "Registration rejected: password mismatch", context=context, input=log_input
            )
            raise ValidationError(messages.PASSWORD_MISMATCH, code="PASSWORD_MISMATCH")

        user = User(
            firstname=data.firstname or "",
            lastname=data.lastname or "",
            email=email,
            hashed_password=hash_password(password),
            email_verified=False,
            global_role=GlobalRole.REGULAR_USER.value,
        )
        self.user_repo.add(user)
        try:
            await self.session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration for the same email
            await self.session.rollback()
            logger.warning("Registration rejected: email taken", context=context, input=log_input)
            raise ConflictError(
                messages.EMAIL_ALREADY_REGISTERED, code="EMAIL_ALREADY_REGISTERED"
            ) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to store new account", context=context, input=log_input, exc_info=e
            )
            raise InternalError() from e

        token = create_verification_token(user.id, user.email)
        sent = await asyncio.to_thread(
            send_verification_email, user.email, user.id, token, user.firstname
        )
        if not sent:
            logger.error(
                "Account created but verification email failed",
                context=context,
                user_id=str(user.id),
            )
            raise UnavailableError()

        logger.info("Account registered", context=context, user_id=str(user.id), input=log_input)
        return messages.REGISTRATION_EMAIL_SENT

    async def verify_user(self, user_id: str | UUID, token: str) -> str:
        """Mark an account verified. Unknown accounts get the same confirmation.

        Raises:
            ValidationError: malformed id, or a token that is expired, tampered,
                or issued for another account
            InternalError: the lookup or update failed
        """
        context = "AccountService.verify_user"
        uid = parse_user_id(user_id)

        user = await self._get_user(uid, context)
        if user is None:
            logger.info("Verification for unknown account", context=context, user_id=str(uid))
            return messages.SUCCESSFUL_VERIFICATION

        payload = decode_token(token, TokenType.VERIFICATION)
        if payload is None or payload.get("id") != str(user.id):
            logger.warning("Verification rejected: bad token", context=context, user_id=str(uid))
            raise ValidationError(messages.BAD_VERIFICATION_TOKEN, code="BAD_TOKEN")

        if not user.email_verified:
            user.email_verified = True
            user.updated_at = utc_now()
            await self._commit(context, user_id=str(uid))
            logger.info("Account verified", context=context, user_id=str(uid))

        return messages.SUCCESSFUL_VERIFICATION

    async def find_by_id(self, user_id: UUID) -> UserDetailRead | None:
        """Password-free view of the account, or None if there is none."""
        user = await self._get_user(user_id, "AccountService.find_by_id")
        if user is None:
            return None
        return UserDetailRead.model_validate(user)

    async def find_by_email(self, email: str) -> UserDetailRead:
        """Password-free view of the account registered under ``email``.

        Raises:
            NotFoundError: no account uses this email
        """
        try:
            user = await self.user_repo.get_by_email(email)
        except SQLAlchemyError as e:
            logger.error("User lookup failed", context="AccountService.find_by_email", exc_info=e)
            raise InternalError() from e
        if user is None:
            raise NotFoundError(messages.USER_NOT_FOUND)
        return UserDetailRead.model_validate(user)

    async def list_users(self) -> list[UserDetailRead]:
        try:
            users = await self.user_repo.list_all()
        except SQLAlchemyError as e:
            logger.error("User listing failed", context="AccountService.list_users", exc_info=e)
            raise InternalError() from e
        return [UserDetailRead.model_validate(user) for user in users]

    async def delete_user(self, user_id: str | UUID) -> str:
        """Delete an account with its reset tokens and project memberships.

        Ending the caller's session is left to the transport layer.

        Raises:
            ValidationError: malformed id
            NotFoundError: no such account
        """
        context = "AccountService.delete_user"
        uid = parse_user_id(user_id)

        user = await self._get_user(uid, context)
        if user is None:
            logger.warning("Delete rejected: unknown account", context=context, user_id=str(uid))
            raise NotFoundError(messages.USER_NOT_FOUND)

        try:
            await self.user_repo.delete_with_dependents(uid)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to delete account", context=context, user_id=str(uid), exc_info=e)
            raise InternalError() from e
        await self._commit(context, user_id=str(uid))

        logger.info("Account deleted", context=context, user_id=str(uid))
        return messages.ACCOUNT_DELETED

    async def _issue_reset_email(self, user: User, context: str) -> None:
        token = await self.reset_token_service.create_reset_token(user.id)
        sent = await asyncio.to_thread(
            send_reset_password_email, user.email, user.id, token, user.firstname
        )
        if not sent:
            logger.error("Reset email failed", context=context, user_id=str(user.id))
            raise UnavailableError()
        logger.info("Reset email sent", context=context, user_id=str(user.id))

    async def send_reset_password_email(self, user_id: UUID) -> str:
        """Email a reset link to the signed-in user.

        Raises:
            InternalError: the token could not be issued
            UnavailableError: the email could not be sent
        """
        context = "AccountService.send_reset_password_email"
        user = await self._get_user(user_id, context)
        if user is not None:
            await self._issue_reset_email(user, context)
        else:
            logger.info("Reset requested for unknown account", context=context)
        return messages.RESET_PASSWORD_EMAIL_SENT

    async def send_forgot_password_email(self, data: ForgotPasswordRequest) -> str:
        """Email a reset link to ``data.email`` if it is registered.

        The response is identical for registered and unregistered emails.
        """
        context = "AccountService.send_forgot_password_email"
        user = None
        if data.email:
            try:
                user = await self.user_repo.get_by_email(data.email)
            except SQLAlchemyError as e:
                logger.error("User lookup failed", context=context, exc_info=e)
                raise InternalError() from e

        if user is not None:
            await self._issue_reset_email(user, context)
        else:
            logger.info("Forgot-password for unknown email", context=context)
        return messages.FORGOT_PASSWORD_EMAIL_SENT

    async def reset_password(
        self, user_id: str | UUID, token: str, data: ResetPasswordRequest
    ) -> str:
        """Replace the password using a reset token, then consume the token.

        Raises:
            ValidationError: malformed id, invalid or expired token, token issued
                to another account, missing fields, or confirmation mismatch
            InternalError: the token vanished between validation and lookup, or
                a store operation failed
        """
        context = "AccountService.reset_password"
        uid = parse_user_id(user_id)

        user = await self._get_user(uid, context)
        if user is None:
            logger.info("Reset for unknown account", context=context, user_id=str(uid))
            return messages.PASSWORD_RESET

        if not await self.reset_token_service.validate_reset_token(token):
            logger.warning("Reset rejected: bad token", context=context, user_id=str(uid))
            raise ValidationError(messages.BAD_TOKEN, code="BAD_TOKEN")

        missing = data.missing_fields()
        if missing:
            logger.warning("Reset rejected", context=context, user_id=str(uid), missing=missing)
            raise ValidationError(
                messages.MISSING_PROPERTIES.format(fields=", ".join(missing)),
                code="MISSING_PROPERTIES",
            )
        if data.password != data.password_confirmation:
            logger.warning("Reset rejected: password mismatch", context=context, user_id=str(uid))
            raise ValidationError(messages.PASSWORD_MISMATCH, code="PASSWORD_MISMATCH")
        try:
            match = await self.reset_token_service.find_by_token(token)
        except SQLAlchemyError as e:
            logger.error("Reset token lookup failed", context=context, exc_info=e)
            raise InternalError() from e
        if match is None:
            logger.error(
                "Reset token missing after successful validation",
                context=context,
                user_id=str(uid),
            )
            raise InternalError()
        if match.token.user_id != user.id:
            logger.warning("Reset rejected: token belongs to another account", context=context)
            raise ValidationError(messages.BAD_TOKEN, code="BAD_TOKEN")

        user.hashed_password = hash_password(data.password or "")
        user.updated_at = utc_now()
        # Commits the new password and the token deletion together
        await self.reset_token_service.invalidate_reset_token(token)

        logger.info("Password reset", context=context, user_id=str(uid))
        return messages.PASSWORD_RESET
