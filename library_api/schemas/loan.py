from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from ..core.clock import to_naive_utc

NAIVE_IS_UTC = "Timestamps without an offset are read as UTC, not server-local time."


class LoanCreate(BaseModel):
    copy_id: int
    user_id: int
    loan_date: datetime = Field(
        description="When the copy was lent out; must not be in the future. " + NAIVE_IS_UTC
    )
    expected_return_date: datetime = Field(
        description="Must be later than loan_date. " + NAIVE_IS_UTC
    )
    # must stay empty on create, kept so that a supplied value can be rejected
    actual_return_date: datetime | None = None

    @field_validator("loan_date", "expected_return_date", "actual_return_date")
    @classmethod
    def normalize_timezone(cls, value):
        return to_naive_utc(value)

    @model_validator(mode="after")
    def check_return_after_loan(self):
        if self.expected_return_date <= self.loan_date:
            raise ValueError("Expected return date must be later than the loan date.")
        return self


class LoanOut(BaseModel):
    id: int
    copy_id: int
    user_id: int
    loan_date: datetime
    expected_return_date: datetime
    actual_return_date: datetime | None = None
