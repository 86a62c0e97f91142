from loguru import logger
from passlib.context import CryptContext

from app.errors import BadRequest, Unauthorized
from app.models import User
from app.roles import UserRole
from app.schemas import SignInRequest, SignUpRequest

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    return pwd_context.verify(password, password_hash)


class AuthService:
    async def sign_up(self, payload: SignUpRequest) -> User:
        email = payload.email.lower()
        if await User.exists(email=email):
            raise BadRequest("Email already registered")

        user = await User.create(
            name=payload.name,
            email=email,
            password_hash=hash_password(payload.password),
            role=payload.role or UserRole.CUSTOMER,
        )
        logger.info("New {} account {}", user.role, user.id)
        return user

    async def sign_in(self, payload: SignInRequest) -> tuple[User, str | None]:
        """Returns the user and the subdomain of their hotel, if any."""
        user = (
            await User.filter(email=payload.email.lower())
            .select_related("hotel")
            .first()
        )
        if user is None or not verify_password(payload.password, user.password_hash):
            logger.info("Failed sign-in for {}", payload.email)
            raise Unauthorized("Invalid email or password")
        subdomain = user.hotel.subdomain if user.hotel is not None else None
        return user, subdomain


auth_service = AuthService()
