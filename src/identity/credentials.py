"""Who is browsing: an anonymous visitor or a signed-in customer.

The identity qualifies the cart storage key, so two identities never see
each other's cart. The bearer token is opaque and only checked for presence.
"""

from dataclasses import dataclass

ANONYMOUS_KEY = "anonymous"


@dataclass(frozen=True)
class Identity:
    email: str | None = None
    user_id: str | None = None
    username: str | None = None
    role: str | None = None
    token: str | None = None

    @classmethod
    def anonymous(cls) -> "Identity":
        return cls()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.email and self.token)

    @property
    def is_admin(self) -> bool:
        return self.role == "ADMIN"

    @property
    def storage_key(self) -> str:
        if not self.email:
            return f"cart:{ANONYMOUS_KEY}"
        return f"cart:user:{self.email.strip().lower()}"

    @property
    def display_name(self) -> str:
        return self.username or self.email or "Guest"

    def __repr__(self) -> str:
        # Never leak the token into logs
        return f"Identity(email={self.email!r}, user_id={self.user_id!r}, role={self.role!r})"
