"""
Unit tests for the SSM parameter fetcher.
"""

import boto3
import pytest
from botocore.exceptions import ClientError
from botocore.stub import Stubber

from parameter_cache import CacheDefaults, FetchFailure, ParameterFetcher, SSMParameterFetcher, new
from shared.config import CacheSettings


def _session():
    return boto3.session.Session(
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing"
    )


def _parameter(name, value, parameter_type="String"):
    return {"Parameter": {"Name": name, "Value": value, "Type": parameter_type, "Version": 1}}


class TestSSMParameterFetcher:
    """Test cases for SSMParameterFetcher."""

    @pytest.fixture
    def fetcher(self):
        """Fetcher on an offline session."""
        return SSMParameterFetcher.from_session(_session())

    def test_fetch_returns_value(self, fetcher):
        """Test GetParameter value is returned."""
        with Stubber(fetcher.client) as stubber:
            stubber.add_response(
                "get_parameter",
                _parameter("testtest", "sup"),
                {"Name": "testtest", "WithDecryption": False}
            )

            assert fetcher.fetch("testtest", False) == "sup"
            stubber.assert_no_pending_responses()

    def test_fetch_passes_decryption_flag(self, fetcher):
        """Test WithDecryption follows the decrypt argument."""
        with Stubber(fetcher.client) as stubber:
            stubber.add_response(
                "get_parameter",
                _parameter("/app/db/password", "hunter2", "SecureString"),
                {"Name": "/app/db/password", "WithDecryption": True}
            )

            assert fetcher.fetch("/app/db/password", True) == "hunter2"

    def test_fetch_raises_client_error(self, fetcher):
        """Test store errors propagate from the fetcher."""
        with Stubber(fetcher.client) as stubber:
            stubber.add_client_error(
                "get_parameter",
                service_error_code="ParameterNotFound",
                http_status_code=400
            )

            with pytest.raises(ClientError):
                fetcher.fetch("/missing", False)

    def test_client_makes_single_attempt(self, fetcher):
        """Test botocore retries are disabled."""
        assert isinstance(fetcher, ParameterFetcher)
        assert fetcher.client.meta.config.retries["total_max_attempts"] == 1


class TestNewWithSession:
    """End-to-end tests through new() and a stubbed SSM client."""

    @pytest.fixture
    def cache(self):
        """Cache built from a boto3 session."""
        return new(defaults=CacheDefaults(), session=_session())

    def test_get_key(self, cache):
        """Test lookup served by SSM, then from cache."""
        with Stubber(cache.fetcher.client) as stubber:
            stubber.add_response(
                "get_parameter",
                _parameter("testtest", "sup"),
                {"Name": "testtest", "WithDecryption": False}
            )

            assert cache.get("testtest") == "sup"
            assert cache.get("testtest") == "sup"
            stubber.assert_no_pending_responses()

    def test_get_key_with_decryption(self, cache):
        """Test explicit decryption request."""
        with Stubber(cache.fetcher.client) as stubber:
            stubber.add_response(
                "get_parameter",
                _parameter("testtest", "sup", "SecureString"),
                {"Name": "testtest", "WithDecryption": True}
            )

            assert cache.get_with_option("testtest", True) == "sup"

    def test_get_key_not_found(self, cache):
        """Test SSM errors surface as FetchFailure."""
        with Stubber(cache.fetcher.client) as stubber:
            stubber.add_client_error(
                "get_parameter",
                service_error_code="ParameterNotFound",
                http_status_code=400
            )

            with pytest.raises(FetchFailure) as exc_info:
                cache.get("/missing")

        assert exc_info.value.key == "/missing"
        assert isinstance(exc_info.value.cause, ClientError)
        assert cache.entry("/missing") is None

    def test_new_uses_given_fetcher(self):
        """Test a supplied fetcher is used as is."""
        fetcher = SSMParameterFetcher.from_session(_session())

        cache = new(fetcher)

        assert cache.fetcher is fetcher


class TestNewFromSettings:
    """Region and endpoint resolution in new()."""

    def test_region_and_endpoint_from_environment(self, monkeypatch):
        """Test PARAMETER_CACHE_ variables configure the SSM client."""
        monkeypatch.setenv("PARAMETER_CACHE_AWS_REGION", "eu-west-1")
        monkeypatch.setenv("PARAMETER_CACHE_SSM_ENDPOINT_URL", "http://localhost:4566")

        cache = new(defaults=CacheDefaults())

        assert cache.fetcher.client.meta.region_name == "eu-west-1"
        assert cache.fetcher.client.meta.endpoint_url == "http://localhost:4566"

    def test_region_from_settings(self):
        """Test explicit settings are used without reading the environment."""
        settings = CacheSettings(aws_region="ap-southeast-2", ssm_endpoint_url="http://localhost:4566")

        cache = new(defaults=CacheDefaults(), settings=settings)

        assert cache.fetcher.client.meta.region_name == "ap-southeast-2"
        assert cache.fetcher.client.meta.endpoint_url == "http://localhost:4566"

    def test_arguments_override_settings(self):
        """Test region_name and endpoint_url win over settings."""
        settings = CacheSettings(aws_region="ap-southeast-2", ssm_endpoint_url="http://localhost:4566")

        cache = new(
            defaults=CacheDefaults(),
            region_name="us-west-2",
            endpoint_url="http://localhost:9999",
            settings=settings
        )

        assert cache.fetcher.client.meta.region_name == "us-west-2"
        assert cache.fetcher.client.meta.endpoint_url == "http://localhost:9999"
