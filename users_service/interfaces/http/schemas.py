from pydantic import BaseModel, ConfigDict, Field, field_validator, validate_email
from pydantic.alias_generators import to_camel

class UserIn(BaseModel):
    """Тело POST/PUT запросов; id, если передан, игнорируется."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int | None = None
    first_name: str = Field(max_length=50)
    last_name: str = Field(max_length=50)
    email: str = Field(max_length=100)
    phone: str = Field(max_length=20)
    address: str | None = Field(default=None, max_length=255)

    @field_validator("first_name", "last_name", "phone")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("email")
    @classmethod
    def valid_email(cls, v: str) -> str:
        # только проверка: email хранится ровно в том виде, в каком пришёл
        _, normalized = validate_email(v)
        if normalized.lower() != v.lower():
            raise ValueError("value is not a valid email address")
        return v

class UserOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    address: str | None = None

class UserPageOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    content: list[UserOut]
    number: int
    size: int
    total_elements: int
    total_pages: int
    number_of_elements: int
    first: bool
    last: bool
    empty: bool
