from pydantic import BaseModel, ConfigDict
from typing import Optional


# ---------- 1) Submitted forms (one model per category) ----------

class ContactForm(BaseModel):
    model_config = ConfigDict(extra="forbid")

    firstName: str
    lastName: str
    email: str
    businessPhone: str
    message: str


class PersonalDetails(BaseModel):
    model_config = ConfigDict(extra="forbid")

    firstName: str
    lastName: str
    email: str
    phone: str
    whatsapp: str
    address: str
    city: str
    state: str
    zipcode: str
    opportunityType: Optional[str] = None  # sent by the first step of the opportunity flow


class JobApplicationForm(PersonalDetails):
    skills: str
    whyWorkWithUs: str


class VendorApplicationForm(PersonalDetails):
    companyName: str
    collaboration: str
    proposal: str


class FundingInquiryForm(PersonalDetails):
    investmentInterest: str
    whyInterested: str
    fundName: str


FORM_MODELS = {
    "contact": ContactForm,
    "internship": JobApplicationForm,
    "partnership": VendorApplicationForm,
    "investment": FundingInquiryForm,
}


# ---------- 2) Responses ----------

class SubmitResponse(BaseModel):
    success: bool
    message: str


class ErrorResponse(BaseModel):
    error: str
    field: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    dbConnected: bool
    uptime: float
