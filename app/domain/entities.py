"""
Domain Entities.

UserProfile is the normalized view of a Discord account returned to the
frontend after login. It is never stored.
"""

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass
class UserProfile:
    """Discord user as seen by the careers frontend"""

    id: Optional[str]
    username: Optional[str]
    discriminator: Optional[str]
    avatar: str  # Fully constructed CDN URL, never a bare hash
    email: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)

    def __repr__(self) -> str:
        return f"UserProfile(id={self.id}, username={self.username})"
