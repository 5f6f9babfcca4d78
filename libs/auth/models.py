from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class AuthUser(BaseModel):
    """
    Represents an authenticated user decoded from the bearer token.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="sub")
    email: Optional[EmailStr] = None
    role: str = "authenticated"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class AcademyContext(BaseModel):
    """
    The academy a request acts on, resolved once at the edge and passed
    explicitly into every booking operation.
    """

    academy_id: int
    user_id: str
    impersonating: bool = False
