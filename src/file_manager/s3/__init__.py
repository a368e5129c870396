"""Thin wrappers around the boto3 S3 calls the file manager needs."""
