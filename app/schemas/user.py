from pydantic import BaseModel, EmailStr, ConfigDict, field_validator
from datetime import datetime

class UserCreate(BaseModel):
    email: EmailStr
    password: str
    name: str

    @field_validator('password')
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("La contraseña debe tener al menos 6 caracteres")
        return v

class UserOut(BaseModel):
    id: int
    email: EmailStr
    name: str
    created_at: datetime | None = None
    # IMPORTANTE para devolver ORM:
    model_config = ConfigDict(from_attributes=True)
