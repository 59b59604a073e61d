# expense_tracker/schemas/person.py
from typing import Annotated, Optional
from datetime import datetime
from email_validator import validate_email
from pydantic import AfterValidator, BaseModel, Field

def _check_email(value: str) -> str:
    # Validate only; the address is stored and looked up as submitted
    validate_email(value, check_deliverability=False)
    return value

SubmittedEmail = Annotated[str, AfterValidator(_check_email)]

class PersonBase(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: SubmittedEmail
    phone_number: Optional[str] = Field(None, max_length=20)

class PersonCreate(PersonBase):
    pass

# Fields accepted on PATCH /users/{id}; anything left out is untouched
class PersonUpdate(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(None, min_length=1, max_length=50)
    email: Optional[SubmittedEmail] = None
    phone_number: Optional[str] = Field(None, max_length=20)

class PersonRead(PersonBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
