# Policy Service
"""Loads the security policy from YAML."""

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from ..config import settings
from ..models.policy import SecurityPolicy

logger = logging.getLogger("pipeline.services.policy_service")


class PolicyService:
    """Loads and caches the security policy."""

    def __init__(self, policy_file: Optional[str] = None):
        self._policy_file = policy_file or settings.policy_file
        self._policy: Optional[SecurityPolicy] = None

    @property
    def policy_file(self) -> str:
        return self._policy_file

    def load(self) -> SecurityPolicy:
        """
        Load policy from YAML file.

        A missing file yields the default policy. An unreadable or invalid
        file is logged and also falls back to the default policy.

        Returns:
            SecurityPolicy configuration
        """
        if self._policy is not None:
            return self._policy

        policy_path = Path(self._policy_file)
        if not policy_path.exists():
            logger.warning(f"Policy file not found: {self._policy_file}, using defaults")
            self._policy = SecurityPolicy()
            return self._policy

        try:
            with open(policy_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ValueError(f"expected a mapping at the top level, got {type(data).__name__}")
            self._policy = SecurityPolicy(**data)
        except (OSError, yaml.YAMLError, ValidationError, ValueError) as e:
            logger.exception(f"Error loading policy from {self._policy_file}: {e}")
            self._policy = SecurityPolicy()
            return self._policy

        logger.info(
            f"Loaded policy v{self._policy.version} "
            f"({len(self._policy.enabled_stages())} stages enabled)"
        )
        return self._policy

    def reload(self) -> SecurityPolicy:
        """Force reload policy from file."""
        self._policy = None
        return self.load()

    @property
    def policy(self) -> SecurityPolicy:
        """Get current policy, loading if needed."""
        if self._policy is None:
            return self.load()
        return self._policy


# Global policy service instance
policy_service = PolicyService()
