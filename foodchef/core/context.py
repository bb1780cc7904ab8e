# foodchef/core/context.py
from dataclasses import dataclass
from typing import Optional

from fastapi import Request


@dataclass
class RequestContext:
    """Who is calling and from where, built once per request."""
    actor: str = "guest"
    role: str = "guest"
    ip_address: str = "unknown"
    user_agent: str = "unknown"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @classmethod
    def from_request(cls, request: Request, actor: Optional[str] = None, role: str = "guest") -> "RequestContext":
        client = request.client.host if request.client else "unknown"
        return cls(
            actor=actor or "guest",
            role=role,
            ip_address=client,
            user_agent=request.headers.get("user-agent", "unknown"),
        )


SYSTEM_CONTEXT = RequestContext(actor="system", role="system", ip_address="local", user_agent="internal")
