"""
Database table for stored registrations.
"""

import uuid

from sqlalchemy import TIMESTAMP, Boolean, Column, String, Text, func
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _new_id() -> str:
    return uuid.uuid4().hex


class UdyamSubmission(Base):
    __tablename__ = "udyam_submissions"

    id = Column(String(32), primary_key=True, default=_new_id)
    created_at = Column(TIMESTAMP, server_default=func.now())

    aadhaar_number = Column(String(12), nullable=False)
    # Free text is stored HTML-escaped, which can outgrow the accepted input length
    entrepreneur_name = Column(Text, nullable=False)
    consent = Column(Boolean, nullable=False)
    otp = Column(String(6), nullable=False)
    otp_verified = Column(Boolean, nullable=False)
    organisation_type = Column(Text, nullable=False)
    pan_number = Column(String(10), nullable=False)
    pan_holder_name = Column(Text, nullable=False)
    dob = Column(Text, nullable=False)
    pan_consent = Column(Boolean, nullable=False)
    pincode = Column(String(6), nullable=False)
    state = Column(Text, nullable=False)
    city = Column(Text, nullable=False)

    # Workflow state owned by back-office processing
    status = Column(String(20), nullable=False, default="pending")
