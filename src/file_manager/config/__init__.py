"""
Configuration management for the File Manager.

Contains the Pydantic settings shared by the API, the upload client and the CLI.
"""
