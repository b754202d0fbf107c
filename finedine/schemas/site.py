from pydantic import BaseModel, Field, field_validator


class HomeResponse(BaseModel):
    app: str
    headline: str
    tagline: str
    highlights: list[str]


class ContactInfoResponse(BaseModel):
    name: str
    address: str
    city: str
    phone: str
    email: str
    opening_hours: list[str]


class ContactMessage(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: str
    subject: str = Field(min_length=1, max_length=200)
    message: str = Field(min_length=1, max_length=5000)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        if "@" not in value:
            raise ValueError("Valid email is required")
        return value.strip()
