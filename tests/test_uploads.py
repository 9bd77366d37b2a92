import pytest

from errors import PayloadTooLarge, UnsupportedAttachment
from uploads import MAX_UPLOAD_BYTES, check_size, check_type, save_attachment, storage_filename


def test_storage_filename_replaces_whitespace():
    name = storage_filename("resume", "my cv   final.pdf", 1700000000000)
    assert name == "resume-1700000000000-my_cv_final.pdf"


@pytest.mark.parametrize("original", ["C:\\Users\\me\\cv.pdf", "/tmp/x/cv.pdf"])
def test_storage_filename_drops_directories(original):
    assert storage_filename("resume", original, 1) == "resume-1-cv.pdf"


def test_storage_filename_uses_current_time():
    name = storage_filename("pitchDoc", "deck.pdf")
    field, millis, rest = name.split("-", 2)
    assert field == "pitchDoc"
    assert millis.isdigit() and len(millis) >= 13
    assert rest == "deck.pdf"


@pytest.mark.parametrize(
    "filename,content_type",
    [
        ("cv.pdf", "application/pdf"),
        ("CV.PDF", "application/pdf"),
        ("cv.doc", "application/msword"),
        ("cv.docx", "application/vnd.openxmlformats-officedocument.wordprocessingml.document"),
    ],
)
def test_allowed_types(filename, content_type):
    check_type(filename, content_type)


@pytest.mark.parametrize(
    "filename,content_type",
    [
        ("cv.txt", "text/plain"),
        ("cv.pdf", "image/png"),
        ("cv.exe", "application/pdf"),
        ("cv", "application/pdf"),
        ("cv.pdf", None),
    ],
)
def test_rejected_types(filename, content_type):
    with pytest.raises(UnsupportedAttachment) as exc:
        check_type(filename, content_type)
    assert exc.value.message == "Only PDF, DOC, DOCX files are allowed"


def test_size_ceiling():
    check_size(b"x" * MAX_UPLOAD_BYTES)
    with pytest.raises(PayloadTooLarge) as exc:
        check_size(b"x" * (MAX_UPLOAD_BYTES + 1))
    assert exc.value.message == "File too large. Max 10MB"


def test_save_attachment_writes_file(tmp_path):
    uploads = tmp_path / "uploads"
    name = save_attachment(str(uploads), "resume", "cv.pdf", b"%PDF", millis=42)
    assert name == "resume-42-cv.pdf"
    assert (uploads / name).read_bytes() == b"%PDF"
