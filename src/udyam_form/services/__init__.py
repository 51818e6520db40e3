"""
External lookup services.
"""

from udyam_form.services.pincode import PincodeLocation, PincodeLookup

__all__ = [
    "PincodeLocation",
    "PincodeLookup",
]
