from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

SETUP_STATUS_COMPLETE = "Complete"


class SetupRequest(BaseModel):
    username: str


class SetupResponse(BaseModel):
    """Body of ``POST /setup``.

    ``status`` is open-ended; the backend reports Started, Pending, Updating,
    Failed or Complete, and only Complete is terminal for the client.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: Optional[str] = None
    status: Optional[str] = None

    @property
    def has_id(self) -> bool:
        return bool(self.id)

    @property
    def has_status(self) -> bool:
        return bool(self.status)

    @property
    def is_complete(self) -> bool:
        return self.status == SETUP_STATUS_COMPLETE

    @staticmethod
    def from_body(body: Any) -> "SetupResponse":
        if not isinstance(body, dict):
            return SetupResponse()
        return SetupResponse.model_validate(body)
