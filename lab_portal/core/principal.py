from dataclasses import dataclass
from typing import ClassVar, Union
from ..models.user import User, Admin

USER = "user"
ADMIN = "admin"


@dataclass(frozen=True)
class UserPrincipal:
    user: User
    type: ClassVar[str] = USER

    @property
    def id(self) -> int:
        return self.user.id

    @property
    def email(self) -> str:
        return self.user.email


@dataclass(frozen=True)
class AdminPrincipal:
    admin: Admin
    type: ClassVar[str] = ADMIN

    @property
    def id(self) -> int:
        return self.admin.id

    @property
    def email(self) -> str:
        return self.admin.email


Principal = Union[UserPrincipal, AdminPrincipal]
