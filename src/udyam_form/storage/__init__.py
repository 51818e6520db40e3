"""
Optional persistence sink for validated submissions.
"""

from udyam_form.storage.models import Base, UdyamSubmission
from udyam_form.storage.repository import SubmissionRepository

__all__ = [
    "Base",
    "UdyamSubmission",
    "SubmissionRepository",
]
