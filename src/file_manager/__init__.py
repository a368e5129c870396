"""File manager: presigned-URL uploads and listings over an S3 bucket."""

__version__ = "0.1.0"
