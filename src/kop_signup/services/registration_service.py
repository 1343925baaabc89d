import structlog

from kop_signup.core.errors import GENERIC_MESSAGE, AppError, ErrorCode
from kop_signup.core.log import mask_phone
from kop_signup.models.member import MemberRecord
from kop_signup.repositories.member_repository import DuplicateMemberError, MemberStore
from kop_signup.schemas.signup import RegistrationRequest, SignUpFailure, SignUpResult, SignUpSuccess


logger = structlog.get_logger()

SUCCESS_MESSAGE = "You have been successfully signed up."
DUPLICATE_MESSAGE = "A user with this email or phone number is already registered"


class RegistrationService:
    def __init__(self, store: MemberStore):
        self.store = store

    async def register(self, request: RegistrationRequest) -> SignUpResult:
        """
        Checa email/telefone e insere o membro. Sempre devolve um resultado;
        erros do banco nunca sobem para quem chamou.

        A checagem prévia não é atômica: se duas requisições iguais passarem
        juntas, o índice único recusa a segunda e isso vira DUPLICATE.
        """
        try:
            existing = await self.store.find_by_email_or_phone(request.email, request.phone)
            if existing is not None:
                logger.info("signup-duplicate", existing_id=existing.id, phone=mask_phone(request.phone))
                return self._failure(DUPLICATE_MESSAGE, ErrorCode.DUPLICATE)

            record = MemberRecord.from_request(request)
            await self.store.insert(record)
        except DuplicateMemberError:
            logger.info("signup-duplicate-race", phone=mask_phone(request.phone))
            return self._failure(DUPLICATE_MESSAGE, ErrorCode.DUPLICATE)
        except Exception as e:
            logger.exception("signup-failed")
            return self._failure(str(e) or GENERIC_MESSAGE, ErrorCode.UNKNOWN)

        logger.info("signup-ok", id=record.id)
        return SignUpSuccess(message=SUCCESS_MESSAGE)

    @staticmethod
    def _failure(message: str, code: ErrorCode) -> SignUpFailure:
        return SignUpFailure.from_error(AppError(message, code))
