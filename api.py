# api.py

import logging
import time
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from config import Settings
from errors import (
    MissingAttachment,
    PersistenceFailure,
    ReadFailure,
    ValidationError,
)
from form_config import (
    CONTACT,
    CONTACTS_COLLECTION,
    INTERNSHIP,
    INVESTMENT,
    OPPORTUNITIES_COLLECTION,
    PARTNERSHIP,
    get_form_definition,
)
from records import build_record
from repository import StoredIn, SubmissionStore
from schemas import FORM_MODELS, HealthResponse, SubmitResponse
from uploads import MAX_UPLOAD_BYTES, check_size, check_type, save_attachment
from validation import validate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def get_store(request: Request) -> SubmissionStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


# ===================== helpers =====================

async def _read_body(request: Request) -> Dict[str, Any]:
    """Contact form body: JSON object or form-encoded fields."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            data = await request.json()
        except ValueError:
            raise ValidationError("Invalid request body")
        if not isinstance(data, dict):
            raise ValidationError("Invalid request body")
        return data

    form = await request.form()
    return {k: v for k, v in form.multi_items()}


def _check_fields(category: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    result = validate(category, fields)
    if not result.valid:
        raise ValidationError(result.message, result.field)
    return FORM_MODELS[category](**fields).model_dump(exclude_none=True)


async def _persist(store: SubmissionStore, category: str, record: Dict[str, Any]) -> SubmitResponse:
    form_def = get_form_definition(category)
    try:
        stored_in = await run_in_threadpool(store.write, form_def["collection"], record)
    except PersistenceFailure as e:
        logger.error(
            "%s not saved (%s store)",
            form_def["human_name"],
            e.source,
            exc_info=e.__cause__ or e,
        )
        raise

    logger.info("%s saved to %s store: %s", form_def["human_name"], stored_in.value, record.get("email"))
    if stored_in == StoredIn.PRIMARY:
        return SubmitResponse(success=True, message=form_def["saved_message"])
    return SubmitResponse(success=True, message=form_def["saved_locally_message"])


async def _submit_opportunity(
    request: Request,
    category: str,
    store: SubmissionStore,
    settings: Settings,
) -> SubmitResponse:
    """
    Order of checks:
      1. attachment size (before anything else)
      2. fields (required / email / unknown)
      3. attachment present and of an allowed type
    The file is only written once all checks pass.
    """
    form_def = get_form_definition(category)
    upload_field = form_def["upload_field"]

    form = await request.form()
    upload = form.get(upload_field)
    content = None
    if isinstance(upload, UploadFile) and upload.filename:
        content = await upload.read(MAX_UPLOAD_BYTES + 1)
        check_size(content)
    else:
        upload = None

    fields = {k: v for k, v in form.multi_items() if k != upload_field}
    logger.debug("%s body keys: %s file: %s", category, list(fields), upload is not None)
    clean = _check_fields(category, fields)

    if upload is None:
        raise MissingAttachment(form_def["missing_attachment_message"])
    check_type(upload.filename, upload.content_type)

    try:
        filename = await run_in_threadpool(
            save_attachment, settings.uploads_dir, upload_field, upload.filename, content
        )
    except OSError as e:
        logger.error("Could not store %s attachment", category, exc_info=e)
        raise PersistenceFailure("uploads") from e

    record = build_record(category, clean, filename)
    return await _persist(store, category, record)


async def _read_collection(store: SubmissionStore, collection: str, error_message: str) -> List[Dict[str, Any]]:
    try:
        return await run_in_threadpool(store.read_all, collection)
    except (SQLAlchemyError, OSError, ValueError) as e:
        logger.error("Reading %s failed", collection, exc_info=e)
        raise ReadFailure(error_message) from e


# ===================== 1) Contact =====================
@router.post("/contact", response_model=SubmitResponse)
async def submit_contact(request: Request, store: SubmissionStore = Depends(get_store)):
    fields = await _read_body(request)
    clean = _check_fields(CONTACT, fields)
    record = build_record(CONTACT, clean)
    return await _persist(store, CONTACT, record)


# ===================== 2) Opportunities =====================
@router.post("/opportunity/job", response_model=SubmitResponse)
async def submit_job(
    request: Request,
    store: SubmissionStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    return await _submit_opportunity(request, INTERNSHIP, store, settings)


@router.post("/opportunity/vendor", response_model=SubmitResponse)
async def submit_vendor(
    request: Request,
    store: SubmissionStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    return await _submit_opportunity(request, PARTNERSHIP, store, settings)


@router.post("/opportunity/funding", response_model=SubmitResponse)
async def submit_funding(
    request: Request,
    store: SubmissionStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    return await _submit_opportunity(request, INVESTMENT, store, settings)


# ===================== 3) Admin & health =====================
@router.get("/admin/contacts")
async def list_contacts(store: SubmissionStore = Depends(get_store)):
    return await _read_collection(store, CONTACTS_COLLECTION, "Failed to fetch contacts")


@router.get("/admin/opportunities")
async def list_opportunities(store: SubmissionStore = Depends(get_store)):
    return await _read_collection(store, OPPORTUNITIES_COLLECTION, "Failed to fetch opportunities")


@router.get("/health", response_model=HealthResponse)
def health(request: Request, store: SubmissionStore = Depends(get_store)):
    return HealthResponse(
        status="OK",
        dbConnected=store.is_primary_available(),
        uptime=round(time.monotonic() - request.app.state.started_at, 3),
    )
