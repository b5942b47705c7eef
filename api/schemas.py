"""Request bodies. Validation failures become 400 responses."""

import datetime as dt
from decimal import Decimal
from typing import Annotated, Literal, Optional

from fastapi import Path
from pydantic import BaseModel, EmailStr, Field, StringConstraints, field_validator

from db.manager import MAX_ROW_ID
from services.amounts import MAX_AMOUNT

EntryType = Literal["income", "expense"]
MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
MAX_PASSWORD_BYTES = 72

Name = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)
]
RowId = Annotated[int, Field(gt=0, le=MAX_ROW_ID)]
Amount = Annotated[Decimal, Field(gt=0, le=MAX_AMOUNT, decimal_places=2)]

# Path parameter form of RowId
PathId = Annotated[int, Path(gt=0, le=MAX_ROW_ID)]


class RegisterRequest(BaseModel):
    name: Name
    email: EmailStr
    password: str = Field(min_length=6)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class CategoryRequest(BaseModel):
    name: Name
    type: EntryType


class TransactionRequest(BaseModel):
    category_id: Optional[RowId] = None
    amount: Amount
    type: EntryType
    date: dt.date
    description: Optional[str] = Field(default=None, max_length=500)


class BudgetRequest(BaseModel):
    category_id: Optional[RowId] = None
    period_month: str = Field(pattern=MONTH_PATTERN)
    limit_amount: Amount
