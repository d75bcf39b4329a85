from dataclasses import dataclass, field
from typing import Optional, Set


@dataclass(frozen=True)
class UserPrincipal:
    """An authenticated user name."""
    name: str


@dataclass
class Subject:
    """Principals established by a successful login."""
    principals: Set[UserPrincipal] = field(default_factory=set)

    @property
    def user_name(self) -> Optional[str]:
        for principal in self.principals:
            return principal.name
        return None
