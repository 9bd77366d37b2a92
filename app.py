# app.py
# Streamlit frontend for the Bhairav Dynamics site
# Pages:
# 1) Home / About
# 2) Contact form -> POST /api/contact
# 3) Opportunity: personal details + type, then the matching form -> POST /api/opportunity/*
# 4) Submissions viewer -> GET /api/admin/*
#
# Run with:  streamlit run app.py

import streamlit as st

from client import BASE_URL, get_health, get_records, submit_contact, submit_opportunity
from form_config import (
    CONTACT,
    INTERNSHIP,
    INVESTMENT,
    PARTNERSHIP,
    get_form_definition,
)
from validation import invalid_phone_fields, is_blank, validate_email

LABELS = {
    "firstName": "First name",
    "lastName": "Last name",
    "email": "Email",
    "businessPhone": "Business phone",
    "message": "Message",
    "phone": "Phone",
    "whatsapp": "WhatsApp number",
    "address": "Address",
    "city": "City",
    "state": "State",
    "zipcode": "Zip code",
    "skills": "Skills",
    "whyWorkWithUs": "Why do you want to work with us?",
    "companyName": "Company name",
    "collaboration": "Type of collaboration",
    "proposal": "Proposal summary",
    "investmentInterest": "Investment interest",
    "whyInterested": "Why are you interested?",
    "fundName": "Fund name",
}

LONG_TEXT_FIELDS = {"message", "address", "skills", "whyWorkWithUs", "proposal", "whyInterested"}

OPPORTUNITY_TYPES = {
    INTERNSHIP: "Job / Internship",
    PARTNERSHIP: "Vendor / Partnership",
    INVESTMENT: "Funding / Investment",
}

PERSONAL_FIELDS = ["firstName", "lastName", "email", "phone", "whatsapp", "address", "city", "state", "zipcode"]

# MIME types the backend accepts, keyed by extension
ATTACHMENT_TYPES = {
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


# ==============================
# CLIENT-SIDE CHECKS
# ==============================
def check_fields(category, fields, names):
    """Returns a list of human readable problems (empty when OK)."""
    problems = []
    for name in names:
        if is_blank(fields.get(name)):
            problems.append(f"{LABELS.get(name, name)} is required.")
    email = fields.get("email")
    if email and not validate_email(email):
        problems.append("Please enter a valid email address.")
    for name in invalid_phone_fields(category, fields):
        if name in names:
            problems.append(f"{LABELS.get(name, name)} doesn't look like a phone number.")
    return problems


def field_input(name, key):
    label = LABELS.get(name, name)
    if name in LONG_TEXT_FIELDS:
        return st.text_area(label, key=key, height=120)
    return st.text_input(label, key=key)


def show_thank_you(result):
    if result["ok"]:
        st.success("Thank you! We have received your submission and will get back to you soon.")
        st.caption(result["response"].get("message", ""))
    else:
        st.error(f"Submission failed: {result['error']}")


# ==============================
# STREAMLIT UI
# ==============================
st.set_page_config(page_title="Bhairav Dynamics", layout="centered")

st.sidebar.header("Bhairav Dynamics")
page = st.sidebar.radio("Navigate", ["Home", "Contact", "Opportunity", "Submissions"])
show_raw = st.sidebar.checkbox("Show raw JSON", value=False)
st.sidebar.caption(f"API: {BASE_URL}")


# -------------------------------
# HOME
# -------------------------------
if page == "Home":
    st.title("Bhairav Dynamics")
    st.subheader("Engineering tomorrow, today.")
    st.write(
        "We build reliable systems for ambitious organisations. "
        "Reach out through the Contact page, or explore careers, partnerships "
        "and investment opportunities on the Opportunity page."
    )


# -------------------------------
# CONTACT
# -------------------------------
elif page == "Contact":
    st.title("Contact us")
    form_def = get_form_definition(CONTACT)

    with st.form("contactForm", clear_on_submit=False):
        values = {name: field_input(name, f"contact_{name}") for name in form_def["required_fields"]}
        submitted = st.form_submit_button("Submit")

    if submitted:
        problems = check_fields(CONTACT, values, form_def["required_fields"])
        if problems:
            for p in problems:
                st.error(p)
        else:
            with st.spinner("Submitting..."):
                result = submit_contact({k: v.strip() for k, v in values.items()})
            show_thank_you(result)
            if show_raw and result["ok"]:
                st.json(result["response"])


# -------------------------------
# OPPORTUNITY (two steps)
# -------------------------------
elif page == "Opportunity":
    st.title("Opportunities")

    step = st.session_state.get("opportunity_step", 1)

    if step == 1:
        st.header("1) Your details")
        personal = {name: field_input(name, f"opp_{name}") for name in PERSONAL_FIELDS}
        opportunity_type = st.selectbox(
            "Opportunity type",
            options=[""] + list(OPPORTUNITY_TYPES),
            format_func=lambda v: OPPORTUNITY_TYPES.get(v, "Select..."),
        )

        if st.button("Next"):
            problems = check_fields(INTERNSHIP, personal, PERSONAL_FIELDS)
            if problems:
                st.error("Please fill in all required fields!")
                for p in problems:
                    st.error(p)
            elif not opportunity_type:
                st.error("Please select an opportunity type.")
            else:
                st.session_state["opportunity_personal"] = personal
                st.session_state["opportunity_type"] = opportunity_type
                st.session_state["opportunity_step"] = 2
                st.rerun()

    else:
        category = st.session_state["opportunity_type"]
        personal = st.session_state["opportunity_personal"]
        form_def = get_form_definition(category)
        extra_fields = [f for f in form_def["required_fields"] if f not in PERSONAL_FIELDS]

        st.header(f"2) {form_def['human_name']}")
        if st.button("Back"):
            st.session_state["opportunity_step"] = 1
            st.rerun()

        values = {name: field_input(name, f"{category}_{name}") for name in extra_fields}
        uploaded = st.file_uploader(
            "Attach document (PDF, DOC, DOCX, max 10MB)",
            type=list(ATTACHMENT_TYPES),
            key=f"{category}_upload",
        )

        if st.button("Submit"):
            problems = check_fields(category, values, extra_fields)
            if uploaded is None:
                problems.append(form_def["missing_attachment_message"] + ".")
            if problems:
                for p in problems:
                    st.error(p)
            else:
                fields = {k: v.strip() for k, v in {**personal, **values}.items()}
                fields["opportunityType"] = category
                ext = uploaded.name.rsplit(".", 1)[-1].lower()
                attachment = (uploaded.name, uploaded.getvalue(), ATTACHMENT_TYPES.get(ext, uploaded.type))
                with st.spinner("Submitting..."):
                    result = submit_opportunity(category, fields, form_def["upload_field"], attachment)
                show_thank_you(result)
                if result["ok"]:
                    st.session_state["opportunity_step"] = 1
                    st.session_state.pop("opportunity_personal", None)


# -------------------------------
# SUBMISSIONS
# -------------------------------
else:
    st.title("Submissions")

    health = get_health()
    if health.get("status") == "OK":
        where = "database" if health.get("dbConnected") else "local JSON files (database offline)"
        st.info(f"Reading from {where}. Uptime: {health.get('uptime', 0):.0f}s")
    else:
        st.error(f"Backend unreachable: {health.get('error')}")

    for kind in ("contacts", "opportunities"):
        with st.expander(kind.capitalize()):
            if st.button(f"Load {kind}", key=f"load_{kind}"):
                rows = get_records(kind)
                if isinstance(rows, list) and rows:
                    st.table(rows)
                elif isinstance(rows, list):
                    st.write("No submissions yet.")
                else:
                    st.json(rows)

st.markdown("---")
st.caption("Bhairav Dynamics")
