"""User service client: sign in and registration.

Token issuance and role checks belong to the user service. This client
only exchanges credentials for an ``Identity`` carrying the bearer token.
"""

import structlog
from pydantic import Field

from identity.credentials import Identity
from shared.http import ServiceClient
from shared.schemas import WireModel

logger = structlog.get_logger(__name__)


class AuthResponse(WireModel):
    token: str
    type: str = "Bearer"
    id: int | str | None = None
    username: str | None = None
    email: str | None = None
    role: str | None = None

    def to_identity(self, fallback_email: str | None = None) -> Identity:
        return Identity(
            email=self.email or fallback_email,
            user_id=str(self.id) if self.id is not None else None,
            username=self.username,
            role=self.role,
            token=self.token,
        )


class RegistrationRequest(WireModel):
    username: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)
    first_name: str | None = None
    last_name: str | None = None


class AuthClient(ServiceClient):
    service_name = "user-service"

    def login(self, email: str, password: str) -> Identity:
        body = self.request("POST", "/api/auth/login", json={"email": email, "password": password})
        identity = self.parse(AuthResponse, body).to_identity(fallback_email=email)
        logger.info("Signed in", email=identity.email, role=identity.role)
        return identity

    def register(self, registration: RegistrationRequest) -> Identity:
        body = self.request(
            "POST",
            "/api/auth/register",
            json=registration.to_json(exclude_none=True),
        )
        identity = self.parse(AuthResponse, body).to_identity(fallback_email=registration.email)
        logger.info("Registered", email=identity.email)
        return identity
