# Policy Service Tests
"""Tests for policy loading."""

import os
import tempfile

import yaml

from request_pipeline.models.policy import SecurityPolicy
from request_pipeline.services.policy_service import PolicyService


class TestPolicyService:
    """Test policy service."""

    def test_load_default_policy(self):
        """Test loading with missing policy file."""
        service = PolicyService(policy_file="/nonexistent/policy.yaml")
        policy = service.load()

        assert isinstance(policy, SecurityPolicy)
        assert policy.authentication.exempt_paths == ["/"]
        assert policy.authentication.exempt_prefixes == ["/test"]
        assert policy.blocked_paths.prefixes == ["/unauthorized"]
        assert policy.async_processing.delay_ms == 100

    def test_load_policy_from_file(self):
        """Test loading policy from YAML file."""
        policy_data = {
            "version": "2.0",
            "authentication": {
                "query_param": "token",
                "exempt_paths": ["/", "/health"],
            },
            "async_processing": {"enabled": False},
        }

        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            yaml.dump(policy_data, f)
            policy_file = f.name

        try:
            service = PolicyService(policy_file=policy_file)
            policy = service.load()

            assert policy.version == "2.0"
            assert policy.authentication.query_param == "token"
            assert policy.authentication.exempt_paths == ["/", "/health"]
            assert policy.async_processing.enabled is False
            # Unspecified sections keep their defaults
            assert policy.secure_transport.enabled is True
            assert "async_processing" not in policy.enabled_stages()
        finally:
            os.unlink(policy_file)

    def test_repo_policy_matches_defaults(self):
        """The shipped policy.yaml describes the default pipeline."""
        repo_policy = os.path.join(os.path.dirname(__file__), "..", "policy.yaml")

        policy = PolicyService(policy_file=repo_policy).load()

        assert policy == SecurityPolicy()

    def test_invalid_policy_falls_back_to_defaults(self, tmp_path):
        policy_file = tmp_path / "policy.yaml"
        policy_file.write_text("async_processing:\n  delay_ms: -5\n")

        policy = PolicyService(policy_file=str(policy_file)).load()

        assert policy == SecurityPolicy()

    def test_non_mapping_policy_falls_back_to_defaults(self, tmp_path):
        policy_file = tmp_path / "policy.yaml"
        policy_file.write_text("- just\n- a list\n")

        policy = PolicyService(policy_file=str(policy_file)).load()

        assert policy == SecurityPolicy()

    def test_empty_file_uses_defaults(self, tmp_path):
        policy_file = tmp_path / "policy.yaml"
        policy_file.write_text("")

        assert PolicyService(policy_file=str(policy_file)).load() == SecurityPolicy()

    def test_policy_is_cached_until_reload(self, tmp_path):
        policy_file = tmp_path / "policy.yaml"
        policy_file.write_text("version: '1.0'\n")
        service = PolicyService(policy_file=str(policy_file))

        first = service.policy
        policy_file.write_text("version: '1.1'\n")

        assert service.policy is first
        assert service.reload().version == "1.1"

    def test_enabled_stages_order(self):
        assert SecurityPolicy().enabled_stages() == [
            "secure_transport",
            "authentication",
            "blocked_paths",
            "input_validation",
            "async_processing",
            "security_logging",
        ]
