from sqlalchemy import Column, Integer, String, JSON
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class FormSubmission(Base):
    __tablename__ = "form_submissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    collection = Column(String(100), nullable=False, index=True)
    document = Column(JSON, nullable=False)
    # ISO-8601 UTC string copied from the document; sorts lexicographically
    created_at = Column(String(40), nullable=False, index=True)
