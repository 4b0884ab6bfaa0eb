"""
Client Models.

Wire models for the agent's HTTP API and the client configuration.
"""

import base64

from pydantic import BaseModel, ConfigDict, Field, field_validator


class KVPair(BaseModel):
    """A key-value entry as returned by the agent's /v1/kv endpoint."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    key: str = Field(alias="Key")
    flags: int = Field(default=0, alias="Flags", ge=0, lt=2**64)
    value: bytes = Field(default=b"", alias="Value")
    create_index: int = Field(default=0, alias="CreateIndex")
    modify_index: int = Field(default=0, alias="ModifyIndex")
    lock_index: int = Field(default=0, alias="LockIndex")
    session: str | None = Field(default=None, alias="Session")

    @field_validator("value", mode="before")
    @classmethod
    def _decode_value(cls, v: object) -> object:
        # The agent sends values base64-encoded, and null for empty values.
        if v is None:
            return b""
        if isinstance(v, str):
            return base64.b64decode(v)
        return v


class ClientConfig(BaseModel):
    """
    Connection settings for one ClusterClient.

    Attributes:
        address: host:port, or a URL with http://, https:// or unix:// scheme.
        scheme: Used when address carries no scheme.
        token: ACL token sent with every request.
        datacenter: Default datacenter for calls that do not pass one.
        http_auth: Optional "user:pass" for HTTP basic auth.
        timeout: Request timeout in seconds.
        verify_ssl: Verify the agent's TLS certificate.
        ca_file: CA bundle used for TLS verification.
    """

    model_config = ConfigDict(frozen=True)

    address: str = "127.0.0.1:8500"
    scheme: str = "http"
    token: str = ""
    datacenter: str = ""
    http_auth: str = ""
    timeout: float = 30.0
    verify_ssl: bool = True
    ca_file: str | None = None
