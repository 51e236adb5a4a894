from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_serializer, model_validator


class LoanRequest(BaseModel):
    # NaN/Infinity would pass the minimum-amount check and poison the balance
    model_config = ConfigDict(allow_inf_nan=False)

    name: str
    email: str
    account_type: str
    account_number: str
    govt_id_type: str
    govt_id_number: str
    loan_type: str
    # any amount is accepted here; amounts below 1 are declined, not rejected
    loan_amount: float
    interest_rate: float
    time_period: str

    @model_validator(mode="before")
    def check_required_fields(cls, values):
        """
        Ensure required keys are present and not null.
        This provides a clearer single error message when required fields are missing.
        """
        if not isinstance(values, dict):
            return values
        required = [
            "name", "email", "account_type", "account_number", "govt_id_type",
            "govt_id_number", "loan_type", "loan_amount", "interest_rate", "time_period",
        ]
        missing = [key for key in required if values.get(key) is None]
        if missing:
            # raising ValueError produces a validation error surfaced as 422 by FastAPI
            raise ValueError(f"Missing required field(s): {', '.join(missing)}")
        return values


class LoanResponse(BaseModel):
    approved: bool
    message: str


class LoanHistoryRequest(BaseModel):
    email: str


class LoanRecord(BaseModel):
    """
    A stored loan as returned by /loan/history.
    """
    model_config = ConfigDict(from_attributes=True)

    name: Optional[str] = None
    email: str
    account_type: Optional[str] = None
    account_number: str
    govt_id_type: Optional[str] = None
    govt_id_number: Optional[str] = None
    loan_type: Optional[str] = None
    loan_amount: float
    interest_rate: Optional[float] = None
    time_period: Optional[str] = None
    status: str
    timestamp: Optional[datetime] = None

    @field_serializer("timestamp")
    def serialize_timestamp(self, value: Optional[datetime]) -> Optional[str]:
        # local date-time, no offset
        return value.replace(tzinfo=None).isoformat() if value is not None else None
