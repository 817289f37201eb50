from typing import Optional, Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime

# --------------------------
# Persistence schemas
#
# These mirror what the store accepts. Handlers only check required fields;
# anything these models reject fails the insert and is reported as a server
# error. Undeclared fields are dropped, and createdAt is never taken from input.
# --------------------------
Gender = Literal["Male", "Female", "Other"]


class _Document(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class DonorDoc(_Document):
    name: str
    age: Optional[int] = Field(None, ge=18, le=65)
    gender: Optional[Gender] = None
    bloodGroup: str
    phone: str
    email: Optional[str] = None
    address: Optional[str] = None
    lastDonationDate: Optional[datetime] = None
    consent: bool

    @field_validator("age", "lastDonationDate", mode="before")
    @classmethod
    def _blank_is_null(cls, v):
        # form posts send "" for untouched optional inputs
        if isinstance(v, str) and not v.strip():
            return None
        return v


class BloodRequestDoc(_Document):
    patientName: str
    bloodGroup: str
    units: float = Field(allow_inf_nan=False)
    hospital: str
    contactPhone: str
    additionalInfo: Optional[str] = None

    @field_validator("units")
    @classmethod
    def _whole_units(cls, v: float):
        # keep 2 as 2, not 2.0, in the stored document
        return int(v) if float(v).is_integer() else v


class ContactMessageDoc(_Document):
    name: str
    email: str
    message: str
