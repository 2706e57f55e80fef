"""Request bodies validated before forwarding to admin endpoints.

Only presence is checked here; the backend validates types and values.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class CatalogSyncRequest(BaseModel):
    """Body of POST /reward-sources/{source_id}/catalog/sync.

    Any other fields (rewardId, priority, ...) pass through untouched.
    """

    model_config = ConfigDict(extra="allow")

    sourceIdentifiers: list[Any]


class SendGiftCardRequest(BaseModel):
    """Body of POST /internal/emails/send-gift-card."""

    model_config = ConfigDict(extra="allow")

    source_id: Any
    source_identifier: Any
    amount: Any
    currency: Any
    recipient_email: Any
    recipient_name: Any
    from_email: Any
    from_name: Any
    subject: Any
    custom_message: Any = None

    @field_validator(
        "source_id",
        "source_identifier",
        "amount",
        "currency",
        "recipient_email",
        "recipient_name",
        "from_email",
        "from_name",
        "subject",
    )
    @classmethod
    def _present(cls, value: Any) -> Any:
        # Empty strings, zero, false and null all count as missing
        if not value:
            raise ValueError("field is required")
        return value
