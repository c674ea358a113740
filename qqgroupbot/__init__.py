"""QQ group chat bot logic and mirai-api-http message and event models."""

__version__ = "0.1.0"