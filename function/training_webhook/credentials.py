"""Retrieval of the Notion API key and database ID."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

NOTION_API_KEY_PARAMETER = "/NOTION_API_KEY"
NOTION_DATABASE_ID_PARAMETER = "/NOTION_DATABASE_ID"

DEFAULT_SSM_REGION = "ap-northeast-1"


class CredentialProviderError(Exception):
    """Raised when the credential store itself fails, not when a value is missing."""


@dataclass(frozen=True)
class NotionCredentials:
    api_key: str
    database_id: str


class SSMCredentialProvider:
    """Reads decrypted SecureString parameters from AWS Systems Manager."""

    def __init__(self, region_name: Optional[str] = None, client=None):
        self.region_name = region_name or os.environ.get("SSM_REGION", DEFAULT_SSM_REGION)
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client("ssm", region_name=self.region_name)
        return self._client

    def get_parameter(self, name: str) -> Optional[str]:
        """
        Fetch one parameter by name.

        Returns:
            The decrypted value, or None if the parameter does not exist

        Raises:
            CredentialProviderError: If the SSM call fails for any other reason
        """
        try:
            response = self.client.get_parameter(Name=name, WithDecryption=True)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "ParameterNotFound":
                return None
            raise CredentialProviderError(str(e)) from e
        except BotoCoreError as e:
            raise CredentialProviderError(str(e)) from e

        return response.get("Parameter", {}).get("Value")


class EnvironmentCredentialProvider:
    """Reads parameters from environment variables, e.g. Function App settings."""

    def __init__(self, environ=None):
        self.environ = os.environ if environ is None else environ

    def get_parameter(self, name: str) -> Optional[str]:
        # "/NOTION_API_KEY" -> NOTION_API_KEY
        return self.environ.get(name.lstrip("/")) or None


def get_credential_provider():
    """Pick the credential provider configured by CREDENTIAL_SOURCE."""
    source = os.environ.get("CREDENTIAL_SOURCE", "ssm").strip().lower()
    if source == "env":
        return EnvironmentCredentialProvider()
    if source == "ssm":
        return SSMCredentialProvider()
    raise ValueError(f"Unknown CREDENTIAL_SOURCE: {source}")


def load_notion_credentials(provider, logger: Optional[logging.Logger] = None) -> Optional[NotionCredentials]:
    """
    Look up the Notion API key and database ID.

    Returns None when either value is missing. Failures of the provider
    propagate as CredentialProviderError.
    """
    logger = logger or logging.getLogger(__name__)

    api_key = provider.get_parameter(NOTION_API_KEY_PARAMETER)
    database_id = provider.get_parameter(NOTION_DATABASE_ID_PARAMETER)

    if api_key is None or database_id is None:
        missing = [
            name for name, value in (
                (NOTION_API_KEY_PARAMETER, api_key),
                (NOTION_DATABASE_ID_PARAMETER, database_id),
            )
            if value is None
        ]
        # Nonexistent SSM parameters (ParameterNotFound) end up here too
        logger.warning(
            f"Missing Notion parameters: {missing}. "
            f"Nonexistent or empty parameters switch the webhook to test mode."
        )
        return None

    return NotionCredentials(api_key=api_key, database_id=database_id)
