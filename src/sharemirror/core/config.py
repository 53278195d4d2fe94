"""Share connection configuration.

This module defines the configuration passed once at startup to whatever
constructs the remote file tree. Nothing below the CLI reads settings from
the environment or from disk.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sharemirror.core.types import ConfigError

DEFAULT_ENDPOINT_SUFFIX = "core.windows.net"


@dataclass
class ShareConfig:
    """Configuration for connecting to an Azure file share.

    Either ``connection_string`` or both ``account_name`` and
    ``account_key`` must be provided.

    Attributes:
        share_name: Name of the file share.
        connection_string: Full storage account connection string.
        account_name: Storage account name.
        account_key: Storage account access key.
        endpoint_suffix: DNS suffix of the storage endpoints.
        timeout: Connection timeout in seconds.
    """

    share_name: str
    connection_string: str | None = None
    account_name: str | None = None
    account_key: str | None = None
    endpoint_suffix: str = DEFAULT_ENDPOINT_SUFFIX
    timeout: float = 30.0

    def __post_init__(self) -> None:
        """Normalize and validate fields."""
        self.share_name = (self.share_name or "").strip()
        self.connection_string = (self.connection_string or "").strip() or None
        if not self.share_name:
            raise ConfigError("A share name is required")
        if self.connection_string is None and not (self.account_name and self.account_key):
            raise ConfigError(
                "Either a connection string or an account name and key are required"
            )

    @property
    def effective_connection_string(self) -> str:
        """Get the connection string, building it from name and key if needed."""
        if self.connection_string:
            return self.connection_string
        return (
            "DefaultEndpointsProtocol=https;"
            f"AccountName={self.account_name};"
            f"AccountKey={self.account_key};"
            f"EndpointSuffix={self.endpoint_suffix}"
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ShareConfig:
        """Create from a settings dictionary (config file format)."""
        return cls(
            share_name=data.get("shareName") or "",
            connection_string=data.get("connectionString"),
            account_name=data.get("storageAccountName"),
            account_key=data.get("storageAccountKey"),
            endpoint_suffix=data.get("endpointSuffix") or DEFAULT_ENDPOINT_SUFFIX,
        )

    def to_dict(self) -> dict[str, str]:
        """Convert to a settings dictionary, omitting unset values."""
        data = {
            "shareName": self.share_name,
            "connectionString": self.connection_string,
            "storageAccountName": self.account_name,
            "storageAccountKey": self.account_key,
        }
        if self.endpoint_suffix != DEFAULT_ENDPOINT_SUFFIX:
            data["endpointSuffix"] = self.endpoint_suffix
        return {key: value for key, value in data.items() if value}
