"""
Configuration management for the Wake Word Training Data API.

Contains Pydantic settings and the logging setup shared by the API, the
Lambda entrypoint and the CLI across local-dev, aws-mock and aws-prod modes.
"""
