from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class PatientBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    age: int = Field(0, ge=0)
    address: str = ""
    phone: str = ""
    insurance: str = ""
    pathology: str = ""
    email: Optional[str] = None


class PatientCreate(PatientBase):
    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("email")
    @classmethod
    def empty_email_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class Patient(PatientBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
