import pytest
from click.testing import CliRunner

from file_manager import cli as cli_module
from file_manager.cli import cli
from file_manager.client.api import FileManagerClient
from file_manager.config.settings import Settings
from tests.consts import TEST_BASE_URL, TEST_BUCKET_NAME
from tests.fixtures.client_fixtures import FakeResponse, FakeSession


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def cli_settings(monkeypatch, settings):
    monkeypatch.setattr(cli_module, "get_settings", lambda: settings)
    return settings


@pytest.fixture
def api_backed_cli(monkeypatch, cli_settings, client):
    """Point the CLI at the in-process API instead of a running server."""
    monkeypatch.setattr(
        cli_module, "build_client", lambda settings: FileManagerClient(TEST_BASE_URL, session=client)
    )


def test_show_config_masks_secrets(runner, cli_settings):
    result = runner.invoke(cli, ["show-config"])

    assert result.exit_code == 0
    assert f"s3_bucket_name: {TEST_BUCKET_NAME}" in result.output
    assert "aws_secret_access_key: ****" in result.output
    assert "testing" not in result.output


def test_ls_empty_bucket(runner, api_backed_cli):
    result = runner.invoke(cli, ["ls"])

    assert result.exit_code == 0
    assert "No files found in S3" in result.output


def test_ls_lists_objects(runner, api_backed_cli, mocked_aws):
    mocked_aws.put_object(Bucket=TEST_BUCKET_NAME, Key="report.pdf", Body=b"x" * 2048)

    result = runner.invoke(cli, ["ls"])

    assert result.exit_code == 0
    assert "- report.pdf  2 KB" in result.output


def test_ls_failure_exits_non_zero(runner, monkeypatch, cli_settings):
    session = FakeSession(FakeResponse(500, {"status": 500, "message": "NoSuchBucket"}))
    monkeypatch.setattr(cli_module, "build_client", lambda settings: FileManagerClient(TEST_BASE_URL, session=session))

    result = runner.invoke(cli, ["ls"])

    assert result.exit_code == 1
    assert "NoSuchBucket" in result.output


def test_upload_failure_exits_non_zero(runner, monkeypatch, cli_settings, tmp_path):
    path = tmp_path / "report.pdf"
    path.write_bytes(b"data")
    session = FakeSession(FakeResponse(200, {"status": 400, "message": "Error Found"}))
    monkeypatch.setattr(cli_module, "build_client", lambda settings: FileManagerClient(TEST_BASE_URL, session=session))

    result = runner.invoke(cli, ["upload", str(path)])

    assert result.exit_code == 1
    assert "Getting presigned URL..." in result.output
    assert "Error: Error getting presigned URL: Error Found" in result.output


def test_upload_requires_existing_file(runner, cli_settings, tmp_path):
    result = runner.invoke(cli, ["upload", str(tmp_path / "missing.txt")])

    assert result.exit_code == 2


def test_upload_prints_progress_and_listing(runner, api_backed_cli, mocked_aws, tmp_path):
    path = tmp_path / "report.pdf"
    path.write_bytes(b"x" * 2048)

    result = runner.invoke(cli, ["upload", str(path)])

    assert result.exit_code == 0, result.output
    assert "report.pdf (2 KB)" in result.output
    assert "Uploading file..." in result.output
    assert "Upload completed successfully!" in result.output
    assert "- report.pdf  2 KB" in result.output
    assert mocked_aws.head_object(Bucket=TEST_BUCKET_NAME, Key="report.pdf")["ContentType"] == "application/pdf"


@pytest.mark.parametrize(
    "env_name, value",
    [("LOG_LEVEL", "chatty"), ("PRESIGNED_URL_EXPIRY_SECONDS", "0")],
)
def test_invalid_configuration_is_reported_without_traceback(runner, monkeypatch, env_name, value):
    monkeypatch.setenv(env_name, value)
    monkeypatch.setattr(cli_module, "get_settings", lambda: Settings(_env_file=None))

    result = runner.invoke(cli, ["show-config"])

    assert result.exit_code == 1
    assert "Error: Invalid configuration:" in result.output
    assert env_name.lower() in result.output
    assert "Traceback" not in result.output
