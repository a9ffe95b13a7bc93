"""Test configuration and fixtures for user-manager."""

from tests.fixtures import *  # noqa: F401,F403
