import hashlib
import time
import logging
from supabase import Client
from app.modules.auth.schemas import LoginRequest, RegisterRequest, TokenResponse, RegisterResponse
from app.core.notifications import Notifier
from app.config.settings import settings
from fastapi import HTTPException
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

SIGNED_OUT_MESSAGE = "You must be signed in to perform this action"
DEFAULT_ROLE = "teacher"

# Sessions resolved from a bearer token, keyed by its sha256; many parallel requests reuse one auth call
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_MAX_SIZE = 500


def clear_auth_cache():
    _AUTH_USER_CACHE.clear()


def _token_key(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def _cached_session(key: str) -> Optional[Dict[str, Any]]:
    entry = _AUTH_USER_CACHE.get(key)
    if entry is None:
        return None
    session_user, expiry = entry
    if time.monotonic() >= expiry:
        del _AUTH_USER_CACHE[key]
        return None
    return session_user


def _remember_session(key: str, session_user: Dict[str, Any]) -> None:
    if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
        _AUTH_USER_CACHE[key] = (session_user, time.monotonic() + settings.auth_cache_ttl_sec)


def to_session_user(user) -> Dict[str, Any]:
    """Auth user fields read by the profile dependency; role comes from the profiles row"""
    metadata = user.user_metadata or {}
    return {
        "id": user.id,
        "email": user.email,
        "user_metadata": metadata,
        "app_metadata": user.app_metadata or {},
    }


class AuthService:
    def __init__(self, supabase: Client, notifier: Optional[Notifier] = None):
        self.supabase = supabase
        self.notifier = notifier or Notifier()

    def _auth_error(self, status_code: int, detail: str) -> HTTPException:
        self.notifier.error("Authentication error", detail)
        return HTTPException(status_code=status_code, detail=detail)

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        """Create an account; the profiles trigger reads role and full_name from user metadata"""
        user_metadata = {"role": DEFAULT_ROLE}
        if register_data.full_name:
            user_metadata["full_name"] = register_data.full_name
        try:
            auth_response = self.supabase.auth.sign_up({
                "email": register_data.email,
                "password": register_data.password,
                "options": {"data": user_metadata}
            })
        except Exception as e:
            message = str(e).lower()
            if "already registered" in message or "already exists" in message:
                raise self._auth_error(400, "User already exists")
            logger.error(f"Registration failed: {e}")
            raise self._auth_error(500, f"Registration failed: {e}")

        if not auth_response.user:
            raise self._auth_error(400, "Failed to register user")

        logger.info(f"Registered user {auth_response.user.id}")
        self.notifier.success("Account created", "You can now sign in.")
        return RegisterResponse(
            user_id=auth_response.user.id,
            email=auth_response.user.email or register_data.email,
            message="User registered successfully"
        )

    def login(self, login_data: LoginRequest) -> TokenResponse:
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })
        except Exception as e:
            message = str(e).lower()
            if "invalid" in message or "credentials" in message:
                raise self._auth_error(401, "Invalid email or password")
            logger.error(f"Login failed: {e}")
            raise self._auth_error(500, f"Login failed: {e}")

        if not auth_response.user or not auth_response.session:
            raise self._auth_error(401, "Invalid email or password")

        return TokenResponse(
            access_token=auth_response.session.access_token,
            token_type="bearer",
            user_id=auth_response.user.id,
            email=auth_response.user.email or login_data.email
        )

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Resolve the session behind a bearer token; 401 when there is none"""
        key = _token_key(token)
        session_user = _cached_session(key)
        if session_user is not None:
            return session_user

        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            logger.warning(f"Session lookup failed: {e}")
            message = str(e)
            if "JWT" in message or "expired" in message.lower() or "invalid" in message.lower():
                raise self._auth_error(401, "Invalid or expired token")
            raise self._auth_error(401, SIGNED_OUT_MESSAGE)

        if not user_response or not user_response.user:
            raise self._auth_error(401, SIGNED_OUT_MESSAGE)

        session_user = to_session_user(user_response.user)
        _remember_session(key, session_user)
        return session_user

    def logout(self, token: str) -> bool:
        """Forget the cached session and sign out; tokens stay valid until they expire"""
        _AUTH_USER_CACHE.pop(_token_key(token), None)
        try:
            self.supabase.auth.sign_out()
            return True
        except Exception as e:
            logger.warning(f"Logout failed: {e}")
            return False
