import logging
from typing import Optional

import firebase_admin
import httpx
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials
from pydantic import BaseModel

from .. import config
from ..auth import StaffSession, get_staff_session
from ..rate_limiter import create_rate_limiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

login_rate_limit = create_rate_limiter(
    limit=config.LOGIN_RATE_LIMIT,
    window_seconds=config.LOGIN_RATE_WINDOW_SECONDS,
    key_prefix="login",
)

INVALID_CREDENTIAL = "auth/invalid-credential"
TOO_MANY_REQUESTS = "auth/too-many-requests"
USER_DISABLED = "auth/user-disabled"
INTERNAL_ERROR = "auth/internal-error"

# Identity Toolkit error messages -> client error codes
PROVIDER_ERROR_CODES = {
    "INVALID_LOGIN_CREDENTIALS": INVALID_CREDENTIAL,
    "INVALID_PASSWORD": INVALID_CREDENTIAL,
    "EMAIL_NOT_FOUND": INVALID_CREDENTIAL,
    "INVALID_EMAIL": INVALID_CREDENTIAL,
    "TOO_MANY_ATTEMPTS_TRY_LATER": TOO_MANY_REQUESTS,
    "USER_DISABLED": USER_DISABLED,
}

LOGIN_ERROR_MESSAGES = {
    INVALID_CREDENTIAL: "Invalid email or password. Please try again.",
    TOO_MANY_REQUESTS: "Too many failed attempts. Please try again later.",
}
DEFAULT_LOGIN_ERROR = "Login failed. Please check your credentials."


def login_error_message(code: str) -> str:
    return LOGIN_ERROR_MESSAGES.get(code, DEFAULT_LOGIN_ERROR)


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class LoginResponse(BaseModel):
    success: bool
    code: Optional[str] = None
    message: Optional[str] = None
    uid: Optional[str] = None
    email: Optional[str] = None
    idToken: Optional[str] = None
    refreshToken: Optional[str] = None
    expiresIn: Optional[int] = None


class SessionResponse(BaseModel):
    uid: str
    email: Optional[str] = None
    name: Optional[str] = None
    authTime: Optional[int] = None


class IdentityClient:
    """Email/password sign-in against the Firebase Identity Toolkit REST API"""

    def __init__(self, api_key: Optional[str], auth_url: str = None, transport=None):
        self.api_key = api_key
        self.auth_url = auth_url or config.FIREBASE_AUTH_URL
        self.transport = transport

    async def sign_in(self, email: str, password: str) -> LoginResponse:
        if not self.api_key:
            logger.error("❌ FIREBASE_API_KEY not configured")
            raise HTTPException(status_code=500, detail="Firebase not configured")

        try:
            async with httpx.AsyncClient(transport=self.transport, timeout=10.0) as client:
                response = await client.post(
                    self.auth_url,
                    params={"key": self.api_key},
                    json={"email": email, "password": password, "returnSecureToken": True},
                )
        except httpx.HTTPError as e:
            logger.error(f"❌ Identity provider unreachable: {str(e)}")
            return LoginResponse(
                success=False, code=INTERNAL_ERROR, message=login_error_message(INTERNAL_ERROR)
            )

        if response.status_code == 200:
            data = response.json()
            return LoginResponse(
                success=True,
                uid=data.get("localId"),
                email=data.get("email"),
                idToken=data.get("idToken"),
                refreshToken=data.get("refreshToken"),
                expiresIn=int(data.get("expiresIn", 3600)),
            )

        try:
            provider_message = response.json().get("error", {}).get("message", "")
        except ValueError:
            provider_message = ""
        # Messages may carry a suffix, e.g. "TOO_MANY_ATTEMPTS_TRY_LATER : Access ..."
        provider_code = provider_message.split(" ")[0]
        code = PROVIDER_ERROR_CODES.get(provider_code, INTERNAL_ERROR)
        logger.warning(f"⚠️ Sign-in failed for {email}: {provider_code or response.status_code}")
        return LoginResponse(success=False, code=code, message=login_error_message(code))


def get_identity_client() -> IdentityClient:
    return IdentityClient(config.FIREBASE_API_KEY)


def _ensure_firebase_app():
    """Initialize Firebase Admin SDK (only once)"""
    try:
        return firebase_admin.get_app()
    except ValueError:
        try:
            cred = credentials.ApplicationDefault()
            app = firebase_admin.initialize_app(cred, {"projectId": config.FIREBASE_PROJECT_ID})
            logger.info("Firebase Admin initialized with default credentials")
        except Exception:
            app = firebase_admin.initialize_app(options={"projectId": config.FIREBASE_PROJECT_ID})
            logger.info("Firebase Admin initialized with project ID only")
        return app


def revoke_sessions(uid: str) -> None:
    """Revoke refresh tokens; failures are logged and never reach the caller"""
    try:
        _ensure_firebase_app()
        firebase_auth.revoke_refresh_tokens(uid)
        logger.info(f"✅ Revoked refresh tokens for {uid}")
    except Exception as e:
        logger.error(f"❌ Failed to revoke refresh tokens for {uid}: {str(e)}")


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    response: Response,
    _: None = Depends(login_rate_limit),
    identity: IdentityClient = Depends(get_identity_client),
):
    """Staff sign-in with email and password"""
    email = data.email.strip()
    if not email or not data.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    result = await identity.sign_in(email, data.password)
    if not result.success:
        response.status_code = 429 if result.code == TOO_MANY_REQUESTS else 401
    else:
        logger.info(f"✅ Staff signed in: {result.email}")
    return result


@router.post("/logout")
async def logout(
    background_tasks: BackgroundTasks,
    session: StaffSession = Depends(get_staff_session),
):
    background_tasks.add_task(revoke_sessions, session.uid)
    return {"success": True}


@router.get("/me", response_model=SessionResponse)
async def me(session: StaffSession = Depends(get_staff_session)):
    return SessionResponse(
        uid=session.uid, email=session.email, name=session.name, authTime=session.auth_time
    )
