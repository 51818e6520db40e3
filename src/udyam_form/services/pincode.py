"""
PIN code lookup against the India Post public API.

Used by the form to autofill state and city once a 6-digit PIN is typed.
"""

import logging
from dataclasses import dataclass

import httpx

from udyam_form.config import UdyamFormConfig, get_config
from udyam_form.errors import LookupUnavailable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PincodeLocation:
    """State and district (city) for a PIN code."""

    pincode: str
    state: str
    city: str


class PincodeLookup:
    """Async client for https://api.postalpincode.in/pincode/{pincode}."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_config(cls, config: UdyamFormConfig | None = None) -> "PincodeLookup":
        config = config or get_config()
        return cls(config.pincode_api_url, config.pincode_timeout)

    async def lookup(self, pincode: str) -> PincodeLocation | None:
        """
        Resolve a PIN code.

        Returns:
            The location, or None when the service knows no post office for it.

        Raises:
            LookupUnavailable: On network, HTTP or payload errors.
        """
        url = f"{self.base_url}/{pincode}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError as e:
            logger.warning(f"PIN code lookup failed for {pincode}: {type(e).__name__}")
            raise LookupUnavailable("PIN code service unavailable", {"pincode": pincode}) from e
        except ValueError as e:
            raise LookupUnavailable("PIN code service returned invalid JSON", {"pincode": pincode}) from e

        return self._parse(pincode, payload)

    @staticmethod
    def _parse(pincode: str, payload: object) -> PincodeLocation | None:
        # Shape: [{"Status": "Success", "PostOffice": [{"State": ..., "District": ...}, ...]}]
        if not isinstance(payload, list) or not payload or not isinstance(payload[0], dict):
            raise LookupUnavailable("Unexpected PIN code response", {"pincode": pincode})
        offices = payload[0].get("PostOffice") or []
        if not isinstance(offices, list):
            raise LookupUnavailable("Unexpected PIN code response", {"pincode": pincode})
        if not offices or not isinstance(offices[0], dict):
            return None
        office = offices[0]
        state = office.get("State") or ""
        city = office.get("District") or ""
        if not state and not city:
            return None
        return PincodeLocation(pincode=pincode, state=state, city=city)
