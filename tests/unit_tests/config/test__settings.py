import pytest
from pydantic import ValidationError

from file_manager.config.settings import Settings

ENV_VARS = (
    "AWS_ACCESS_KEY_ID",
    "AWS_ACCESS_KEY",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_SECRET_KEY",
    "S3_BUCKET_NAME",
    "BUCKET_NAME",
    "AWS_ENDPOINT_URL",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.s3_bucket_name is None
    assert settings.presigned_url_expiry_seconds == 36000
    assert settings.list_delimiter == "/"
    assert settings.forward_list_prefix is False
    assert settings.log_level == "INFO"


def test_reads_standard_aws_environment(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "key-id")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "secret")
    monkeypatch.setenv("S3_BUCKET_NAME", "my-bucket")

    settings = Settings(_env_file=None)

    assert settings.aws_access_key_id == "key-id"
    assert settings.aws_secret_access_key == "secret"
    assert settings.s3_bucket_name == "my-bucket"


def test_reads_short_variable_names(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY", "short-id")
    monkeypatch.setenv("AWS_SECRET_KEY", "short-secret")
    monkeypatch.setenv("BUCKET_NAME", "short-bucket")

    settings = Settings(_env_file=None)

    assert settings.aws_access_key_id == "short-id"
    assert settings.aws_secret_access_key == "short-secret"
    assert settings.s3_bucket_name == "short-bucket"


def test_log_level_is_normalized(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")

    assert Settings(_env_file=None).log_level == "DEBUG"


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_level="chatty")


@pytest.mark.parametrize("expiry", [0, 7 * 24 * 60 * 60 + 1])
def test_presigned_url_expiry_bounds(expiry):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, presigned_url_expiry_seconds=expiry)


def test_public_dict_masks_secrets():
    settings = Settings(
        _env_file=None,
        aws_access_key_id="key-id",
        aws_secret_access_key="secret",
        api_base_url="http://localhost:8000/",
    )

    values = settings.public_dict()

    assert values["aws_access_key_id"] == "****"
    assert values["aws_secret_access_key"] == "****"
    assert values["api_base_url"] == "http://localhost:8000"
