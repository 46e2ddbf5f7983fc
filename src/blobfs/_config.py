"""Configuration model — immutable description of an Azure storage account."""

from __future__ import annotations

import dataclasses
import enum
from typing import Any

AZURITE_ENDPOINT = "http://127.0.0.1:10000"


class AzureBackend(enum.Enum):
    """Which service the account URLs point at."""

    AZURE = "azure"
    AZURITE = "azurite"


class AzureCredentialsKind(enum.Enum):
    """How requests to the account are authenticated."""

    ANONYMOUS = "anonymous"
    TOKEN_CREDENTIALS = "token_credentials"
    STORAGE_CREDENTIALS = "storage_credentials"


def _account_urls(account_name: str, backend: AzureBackend) -> tuple[str, str]:
    """Return ``(blob_url, dfs_url)`` for an account."""
    if not account_name or not account_name.strip():
        raise ValueError("account_name must be a non-empty string")
    if backend is AzureBackend.AZURITE:
        url = f"{AZURITE_ENDPOINT}/{account_name}/"
        return url, url
    return (
        f"https://{account_name}.blob.core.windows.net/",
        f"https://{account_name}.dfs.core.windows.net/",
    )


@dataclasses.dataclass(frozen=True)
class AzureOptions:
    """Endpoints and credentials for one storage account.

    Two options compare equal when their endpoint URLs and credentials kind
    match. The credential object itself is not compared.

    :param account_blob_url: Blob service endpoint.
    :param account_dfs_url: Data Lake (dfs) endpoint.
    :param credentials_kind: Kind of credential in ``credential``.
    :param backend: Azure or the local Azurite emulator.
    :param account_name: Storage account name.
    :param credential: Credential passed to the blob service client.
    """

    account_blob_url: str = ""
    account_dfs_url: str = ""
    credentials_kind: AzureCredentialsKind = AzureCredentialsKind.ANONYMOUS
    backend: AzureBackend = dataclasses.field(default=AzureBackend.AZURE, compare=False)
    account_name: str = dataclasses.field(default="", compare=False)
    credential: Any = dataclasses.field(default=None, compare=False, repr=False)

    @classmethod
    def from_account_key(
        cls, account_name: str, account_key: str, *, backend: AzureBackend = AzureBackend.AZURE
    ) -> AzureOptions:
        """Options authenticating with a shared account key.

        :raises ValueError: If ``account_name`` or ``account_key`` is empty.
        """
        from azure.core.credentials import AzureNamedKeyCredential

        if not account_key:
            raise ValueError("account_key must be a non-empty string")
        blob_url, dfs_url = _account_urls(account_name, backend)
        return cls(
            account_blob_url=blob_url,
            account_dfs_url=dfs_url,
            credentials_kind=AzureCredentialsKind.STORAGE_CREDENTIALS,
            backend=backend,
            account_name=account_name,
            credential=AzureNamedKeyCredential(account_name, account_key),
        )

    @classmethod
    def from_token_credential(
        cls, account_name: str, credential: Any, *, backend: AzureBackend = AzureBackend.AZURE
    ) -> AzureOptions:
        """Options authenticating with a token credential (e.g. from ``azure-identity``)."""
        if credential is None:
            raise ValueError("credential must not be None")
        blob_url, dfs_url = _account_urls(account_name, backend)
        return cls(
            account_blob_url=blob_url,
            account_dfs_url=dfs_url,
            credentials_kind=AzureCredentialsKind.TOKEN_CREDENTIALS,
            backend=backend,
            account_name=account_name,
            credential=credential,
        )

    @classmethod
    def anonymous(cls, account_name: str, *, backend: AzureBackend = AzureBackend.AZURE) -> AzureOptions:
        """Options for public (anonymous) read access."""
        blob_url, dfs_url = _account_urls(account_name, backend)
        return cls(account_blob_url=blob_url, account_dfs_url=dfs_url, backend=backend, account_name=account_name)

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> AzureOptions:
        """Construct from a plain dict (e.g. parsed TOML/JSON).

        :param data: Dict with ``account_name`` and optional ``account_key``
            and ``backend`` (``"azure"`` or ``"azurite"``) keys.
        """
        account_name = data.get("account_name")
        if not isinstance(account_name, str):
            msg = "Expected 'account_name' to be a string"
            raise TypeError(msg)
        raw_backend = data.get("backend", AzureBackend.AZURE.value)
        try:
            backend = AzureBackend(raw_backend)
        except ValueError:
            raise ValueError(
                f"Unknown backend {raw_backend!r}. Expected one of: {sorted(b.value for b in AzureBackend)}"
            ) from None
        account_key = data.get("account_key")
        if account_key is None:
            return cls.anonymous(account_name, backend=backend)
        if not isinstance(account_key, str):
            msg = "Expected 'account_key' to be a string"
            raise TypeError(msg)
        return cls.from_account_key(account_name, account_key, backend=backend)
