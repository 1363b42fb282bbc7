"""Global test configuration and fixtures."""

import os
import sys
from pathlib import Path

import boto3
import pytest
from moto import mock_aws

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from awsprovider.provider.provider import new_provider  # noqa: E402

TEST_REGION = "us-east-1"


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Set up test environment variables."""
    os.environ.update(
        {
            "AWS_DEFAULT_REGION": TEST_REGION,
            "AWS_ACCESS_KEY_ID": "testing",
            "AWS_SECRET_ACCESS_KEY": "testing",
            "AWS_SECURITY_TOKEN": "testing",
            "AWS_SESSION_TOKEN": "testing",
            "AWSPROVIDER_LOG_LEVEL": "DEBUG",
            "AWSPROVIDER_CONSOLE_ENABLED": "true",
        }
    )
    # Never read the developer's own profiles.
    os.environ.pop("AWS_PROFILE", None)
    os.environ["AWS_CONFIG_FILE"] = os.devnull
    os.environ["AWS_SHARED_CREDENTIALS_FILE"] = os.devnull


@pytest.fixture
def aws_mocks():
    """Set up AWS service mocks."""
    with mock_aws():
        yield


@pytest.fixture
def ec2_client(aws_mocks):
    """Create a mocked EC2 client."""
    return boto3.client("ec2", region_name=TEST_REGION)


@pytest.fixture
def provider():
    """A freshly assembled provider."""
    return new_provider()


@pytest.fixture
def offline_provider_config():
    """Provider block that configures without any network call."""
    return {
        "region": TEST_REGION,
        "access_key": "testing",
        "secret_key": "testing",
        "skip_credentials_validation": True,
        "skip_requesting_account_id": True,
        "skip_metadata_api_check": True,
    }
