# errors.py
"""
Errors raised while handling a submission.

`message` is the only text that reaches the caller. Anything describing the
underlying cause stays on the exception (and in the logs).
"""

from typing import Optional


class SubmissionError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"error": self.message}


class ValidationError(SubmissionError):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    def to_dict(self):
        body = {"error": self.message}
        if self.field:
            body["field"] = self.field
        return body


class UnsupportedAttachment(SubmissionError):
    def __init__(self, message: str = "Only PDF, DOC, DOCX files are allowed"):
        super().__init__(message)


class MissingAttachment(SubmissionError):
    pass


class PayloadTooLarge(SubmissionError):
    def __init__(self, message: str = "File too large. Max 10MB"):
        super().__init__(message)


class PersistenceFailure(SubmissionError):
    status_code = 500

    def __init__(self, source: str, message: str = "Internal server error"):
        super().__init__(message)
        self.source = source


class ReadFailure(SubmissionError):
    status_code = 500
