"""Utility helpers for plaidbridge."""

from .env_setup import ENV_TEMPLATE, setup_sample_environment

__all__ = ["ENV_TEMPLATE", "setup_sample_environment"]
