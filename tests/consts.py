"""Constants shared by the test suite."""

TEST_BUCKET_NAME = "test-file-manager-bucket"
TEST_REGION = "eu-north-1"
TEST_BASE_URL = "http://testserver"
