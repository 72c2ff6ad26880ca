import base64
import hashlib
from typing import Optional, Dict, Any

from cryptography.fernet import Fernet, InvalidToken

from ..security.jwt import create_token
from ...storage import Repository
from ...utils.exceptions import ConflictError, NotFoundError, UnauthenticatedError, ValidationError
from ...utils.logger import get_logger
from ...utils.models import User, utcnow_iso
from config.settings import app_config

PBKDF2_ITERATIONS = 390000

PROFILE_FIELDS = ("first_name", "last_name", "phone", "bio", "avatar")


class AuthService:
    """Registration, login and profile management."""

    def __init__(self, users: Repository, logger=None, secret: Optional[str] = None, salt: Optional[str] = None):
        self.users = users
        self.logger = logger or get_logger("auth_service")
        self.fernet = self._build_fernet(secret or app_config.encryption_secret, salt or app_config.encryption_salt)

    def _build_fernet(self, secret: str, salt: str) -> Fernet:
        return Fernet(self._derive_key(secret, salt))

    def _derive_key(self, secret: str, salt: str) -> bytes:
        raw = hashlib.pbkdf2_hmac("sha256", secret.encode(), salt.encode(), PBKDF2_ITERATIONS, dklen=32)
        return base64.urlsafe_b64encode(raw)

    def encrypt(self, plaintext: str) -> str:
        return self.fernet.encrypt(plaintext.encode()).decode()

    def decrypt(self, token: str) -> str:
        return self.fernet.decrypt(token.encode()).decode()

    def _find_by_email(self, email: str) -> Optional[User]:
        rows = self.users.find(email=email)
        return User.from_dict(rows[0]) if rows else None

    def _session(self, user: User) -> Dict[str, Any]:
        token = create_token({"sub": user.id, "email": user.email})
        return {"token": token, "user": user.to_public_dict()}

    def get_user(self, user_id: str) -> User:
        row = self.users.get(user_id)
        if not row:
            raise NotFoundError("User not found", {"user_id": user_id})
        return User.from_dict(row)

    def register(self, email: str, password: str, first_name: str, last_name: str) -> Dict[str, Any]:
        email = (email or "").strip().lower()
        missing = [name for name, value in (
            ("email", email), ("password", password),
            ("first_name", first_name), ("last_name", last_name),
        ) if not value]
        if missing:
            raise ValidationError("Missing required fields", {"fields": missing})
        if "@" not in email:
            raise ValidationError("Invalid email address", {"email": email})

        if self._find_by_email(email):
            raise ConflictError("Email already registered", {"email": email})

        now = utcnow_iso()
        row = self.users.insert({
            "email": email,
            "password": self.encrypt(password),
            "first_name": first_name,
            "last_name": last_name,
            "avatar": "",
            "phone": "",
            "bio": "",
            "is_host": False,
            "created_at": now,
            "updated_at": now,
        })
        user = User.from_dict(row)
        self.logger.info("user_registered", user_id=user.id, email=email)
        return self._session(user)

    def login(self, email: str, password: str) -> Dict[str, Any]:
        user = self._find_by_email((email or "").strip().lower())
        if not user or not user.password:
            raise UnauthenticatedError("Invalid credentials")
        try:
            stored = self.decrypt(user.password)
        except InvalidToken:
            raise UnauthenticatedError("Invalid credentials")
        if stored != password:
            raise UnauthenticatedError("Invalid credentials")
        self.logger.info("user_logged_in", user_id=user.id)
        return self._session(user)

    def get_profile(self, actor_id: Optional[str]) -> Dict[str, Any]:
        if not actor_id:
            raise UnauthenticatedError("Not authenticated")
        return self.get_user(actor_id).to_public_dict()

    def update_profile(self, actor_id: Optional[str], changes: Dict[str, Any]) -> Dict[str, Any]:
        """Update profile fields; empty values keep what is already stored."""
        if not actor_id:
            raise UnauthenticatedError("Not authenticated")
        self.get_user(actor_id)

        updates = {key: changes[key] for key in PROFILE_FIELDS if changes.get(key)}
        updates["updated_at"] = utcnow_iso()
        row = self.users.update(actor_id, updates)
        self.logger.info("user_profile_updated", user_id=actor_id, fields=sorted(updates))
        return User.from_dict(row).to_public_dict()

