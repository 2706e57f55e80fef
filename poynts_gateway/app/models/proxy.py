"""Request descriptor and response envelope for the backend proxy."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

HttpMethod = Literal["GET", "POST", "PATCH", "PUT", "DELETE"]


class ProxyRequest(BaseModel):
    """Outbound call to the backend API, built once per inbound request."""

    model_config = ConfigDict(frozen=True)

    method: HttpMethod
    path: str = Field(..., description="Backend path, e.g. '/v1/campaigns/123'")
    body: Any = None
    query_params: dict[str, str] = Field(default_factory=dict)


class ProxyConfig(BaseModel):
    """Per-route forwarding options."""

    model_config = ConfigDict(frozen=True)

    is_admin_route: bool = Field(
        False, description="Cross-organization route; forwarded without organization scope"
    )
    include_org_id: bool = Field(
        True, description="Inject the resolved organization_id into the query string"
    )


ADMIN_PROXY_CONFIG = ProxyConfig(is_admin_route=True, include_org_id=False)


class UpstreamError(BaseModel):
    """Structured error produced from a failed backend call."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    message: str
    name: str = "BackendError"


class ProxyEnvelope(BaseModel):
    """Result of a proxied call: either a payload or an error, never both."""

    model_config = ConfigDict(frozen=True)

    payload: Any = None
    error: UpstreamError | None = None

    @model_validator(mode="after")
    def _one_half_only(self) -> "ProxyEnvelope":
        if self.error is not None and self.payload is not None:
            raise ValueError("envelope cannot carry both a payload and an error")
        return self

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @classmethod
    def success(cls, payload: Any = None) -> "ProxyEnvelope":
        """Successful call; payload is None for 204 responses."""
        return cls(payload=payload)

    @classmethod
    def failure(cls, status_code: int, message: str, name: str = "BackendError") -> "ProxyEnvelope":
        """Failed call."""
        return cls(error=UpstreamError(status_code=status_code, message=message, name=name))
