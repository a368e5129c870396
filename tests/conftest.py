pytest_plugins = [
    "tests.fixtures.s3_fixtures",
    "tests.fixtures.client_fixtures",
]
