"""
AWS Systems Manager Parameter Store fetcher.
"""

from typing import Any, Optional

import boto3
from botocore.config import Config


# One attempt per fetch; the cache never retries and neither does the client
SINGLE_ATTEMPT = Config(retries={"total_max_attempts": 1, "mode": "standard"})


class SSMParameterFetcher:
    """Fetches parameters with ``ssm:GetParameter``."""

    def __init__(self, client: Any):
        self.client = client

    @classmethod
    def from_session(cls, session: boto3.session.Session,
                     endpoint_url: Optional[str] = None) -> "SSMParameterFetcher":
        """Build a fetcher from an already configured boto3 session."""
        return cls(session.client("ssm", endpoint_url=endpoint_url, config=SINGLE_ATTEMPT))

    @classmethod
    def from_region(cls, region_name: Optional[str] = None,
                    endpoint_url: Optional[str] = None) -> "SSMParameterFetcher":
        """Build a fetcher on a default session for a region."""
        return cls.from_session(boto3.session.Session(region_name=region_name), endpoint_url)

    def fetch(self, key: str, decrypt: bool) -> str:
        response = self.client.get_parameter(Name=key, WithDecryption=decrypt)
        return response["Parameter"]["Value"]
