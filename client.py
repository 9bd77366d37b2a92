# client.py
# HTTP helpers used by the Streamlit frontend to talk to the site API.

import os

import requests
from dotenv import load_dotenv

load_dotenv()

BASE_URL = os.getenv("API_BASE_URL", "http://127.0.0.1:3000")

OPPORTUNITY_PATHS = {
    "internship": "/api/opportunity/job",
    "partnership": "/api/opportunity/vendor",
    "investment": "/api/opportunity/funding",
}


def _error_text(resp):
    try:
        return resp.json().get("error") or f"HTTP {resp.status_code}"
    except ValueError:
        return f"HTTP {resp.status_code}"


def submit_contact(fields, base_url=BASE_URL):
    try:
        resp = requests.post(f"{base_url}/api/contact", json=fields, timeout=10)
    except requests.exceptions.RequestException as e:
        return {"ok": False, "error": str(e)}
    if not resp.ok:
        return {"ok": False, "error": _error_text(resp)}
    return {"ok": True, "response": resp.json()}


def submit_opportunity(category, fields, upload_field, attachment, base_url=BASE_URL):
    """
    attachment: (filename, bytes, content_type) or None
    """
    files = {upload_field: attachment} if attachment else None
    try:
        resp = requests.post(
            f"{base_url}{OPPORTUNITY_PATHS[category]}",
            data=fields,
            files=files,
            timeout=60,
        )
    except requests.exceptions.RequestException as e:
        return {"ok": False, "error": str(e)}
    if not resp.ok:
        return {"ok": False, "error": _error_text(resp)}
    return {"ok": True, "response": resp.json()}


def get_records(kind, base_url=BASE_URL):
    """kind: "contacts" or "opportunities" """
    try:
        resp = requests.get(f"{base_url}/api/admin/{kind}", timeout=10)
        resp.raise_for_status()
        return resp.json()
    except requests.exceptions.RequestException as e:
        return {"status": "error", "error": str(e)}


def get_health(base_url=BASE_URL):
    try:
        resp = requests.get(f"{base_url}/api/health", timeout=5)
        resp.raise_for_status()
        return resp.json()
    except requests.exceptions.RequestException as e:
        return {"status": "error", "error": str(e)}
