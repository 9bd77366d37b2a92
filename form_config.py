# form_config.py

CONTACT = "contact"
INTERNSHIP = "internship"
PARTNERSHIP = "partnership"
INVESTMENT = "investment"

CATEGORIES = (CONTACT, INTERNSHIP, PARTNERSHIP, INVESTMENT)

CONTACTS_COLLECTION = "contacts"
OPPORTUNITIES_COLLECTION = "opportunities"

_PERSONAL_FIELDS = [
    "firstName",
    "lastName",
    "email",
    "phone",
    "whatsapp",
    "address",
    "city",
    "state",
    "zipcode",
]

FORM_DEFINITIONS = {
    CONTACT: {
        "human_name": "Contact",
        "collection": CONTACTS_COLLECTION,
        "required_fields": ["firstName", "lastName", "email", "businessPhone", "message"],
        "optional_fields": [],
        "phone_fields": ["businessPhone"],
        "upload_field": None,
        "attachment_field": None,
        "missing_attachment_message": None,
        "saved_message": "Contact saved",
        "saved_locally_message": "Contact saved locally (DB offline)",
    },
    INTERNSHIP: {
        "human_name": "Job / Internship application",
        "collection": OPPORTUNITIES_COLLECTION,
        "required_fields": _PERSONAL_FIELDS + ["skills", "whyWorkWithUs"],
        "optional_fields": ["opportunityType"],
        "phone_fields": ["phone", "whatsapp"],
        "upload_field": "resume",
        "attachment_field": "resumeFilename",
        "missing_attachment_message": "Resume file required",
        "saved_message": "Job application saved",
        "saved_locally_message": "Job application saved locally (DB offline)",
    },
    PARTNERSHIP: {
        "human_name": "Vendor / Partnership application",
        "collection": OPPORTUNITIES_COLLECTION,
        "required_fields": _PERSONAL_FIELDS + ["companyName", "collaboration", "proposal"],
        "optional_fields": ["opportunityType"],
        "phone_fields": ["phone", "whatsapp"],
        "upload_field": "proposalDoc",
        "attachment_field": "proposalFilename",
        "missing_attachment_message": "Proposal file required",
        "saved_message": "Partnership application saved",
        "saved_locally_message": "Vendor application saved locally (DB offline)",
    },
    INVESTMENT: {
        "human_name": "Funding / Investment inquiry",
        "collection": OPPORTUNITIES_COLLECTION,
        "required_fields": _PERSONAL_FIELDS + ["investmentInterest", "whyInterested", "fundName"],
        "optional_fields": ["opportunityType"],
        "phone_fields": ["phone", "whatsapp"],
        "upload_field": "pitchDoc",
        "attachment_field": "pitchFilename",
        "missing_attachment_message": "Pitch file required",
        "saved_message": "Funding inquiry saved",
        "saved_locally_message": "Funding inquiry saved locally (DB offline)",
    },
}


def get_form_definition(category: str):
    return FORM_DEFINITIONS.get(category)


def allowed_fields(category: str):
    form_def = FORM_DEFINITIONS[category]
    return form_def["required_fields"] + form_def["optional_fields"]
