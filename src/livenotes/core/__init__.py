"""Core domain: models, repositories, services and schemas."""
