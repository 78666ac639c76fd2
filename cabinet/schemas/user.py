from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.security import UserRole


class Profile(BaseModel):
    """A user as seen outside the store: never carries the password."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    full_name: str
    role: UserRole


class UserAccount(Profile):
    password: str

    def to_profile(self) -> Profile:
        return Profile(**self.model_dump(exclude={"password"}))


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)
    full_name: str = Field(..., min_length=1, max_length=255)
    role: UserRole = UserRole.THERAPIST

    @field_validator("username", "full_name")
    @classmethod
    def strip_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class PasswordUpdate(BaseModel):
    new_password: str = Field(..., min_length=1)
