# Security Policy Models
"""Pydantic models for the security stage policy."""

from typing import List

from pydantic import BaseModel, Field


class SecureTransportPolicy(BaseModel):
    """Simulated HTTPS enforcement via a query parameter."""

    enabled: bool = Field(default=True, description="Enable the secure transport check")
    query_param: str = Field(default="secure", description="Query parameter carrying the marker")
    expected_value: str = Field(default="true", description="Value that marks the request as secure")


class AuthenticationPolicy(BaseModel):
    """Simulated authentication via a query parameter, with path exemptions."""

    enabled: bool = Field(default=True, description="Enable the authentication check")
    query_param: str = Field(default="authenticated", description="Query parameter carrying the marker")
    expected_value: str = Field(default="true", description="Value that marks the request as authenticated")
    exempt_paths: List[str] = Field(
        default_factory=lambda: ["/"],
        description="Paths that skip authentication (exact match)",
    )
    exempt_prefixes: List[str] = Field(
        default_factory=lambda: ["/test"],
        description="Path prefixes that skip authentication (segment match)",
    )


class BlockedPathPolicy(BaseModel):
    """Path prefixes that are always rejected."""

    enabled: bool = Field(default=True, description="Enable the blocked path check")
    prefixes: List[str] = Field(
        default_factory=lambda: ["/unauthorized"],
        description="Path prefixes to reject (segment match)",
    )


class InputValidationPolicy(BaseModel):
    """Rejects query input containing unsafe content."""

    enabled: bool = Field(default=True, description="Enable input validation")
    query_param: str = Field(default="input", description="Query parameter to validate")
    blocked_patterns: List[str] = Field(
        default_factory=lambda: ["<script>"],
        description="Substrings that make the input invalid",
    )


class AsyncProcessingPolicy(BaseModel):
    """Time-bounded asynchronous work performed before continuing."""

    enabled: bool = Field(default=True, description="Enable the async processing stage")
    delay_ms: int = Field(default=100, ge=0, description="Simulated I/O delay in milliseconds")
    timeout_ms: int = Field(default=1000, gt=0, description="Upper bound on the async work in milliseconds")


class SecurityLoggingPolicy(BaseModel):
    """Audit trail of requests that reach the end of the security chain."""

    enabled: bool = Field(default=True, description="Enable security event logging")


class SecurityPolicy(BaseModel):
    """Complete security policy for the reference pipeline."""

    version: str = Field(default="1.0", description="Policy version")
    secure_transport: SecureTransportPolicy = Field(default_factory=SecureTransportPolicy)
    authentication: AuthenticationPolicy = Field(default_factory=AuthenticationPolicy)
    blocked_paths: BlockedPathPolicy = Field(default_factory=BlockedPathPolicy)
    input_validation: InputValidationPolicy = Field(default_factory=InputValidationPolicy)
    async_processing: AsyncProcessingPolicy = Field(default_factory=AsyncProcessingPolicy)
    security_logging: SecurityLoggingPolicy = Field(default_factory=SecurityLoggingPolicy)

    def enabled_stages(self) -> List[str]:
        """Names of the enabled stage sections, in pipeline order."""
        sections = [
            ("secure_transport", self.secure_transport),
            ("authentication", self.authentication),
            ("blocked_paths", self.blocked_paths),
            ("input_validation", self.input_validation),
            ("async_processing", self.async_processing),
            ("security_logging", self.security_logging),
        ]
        return [name for name, section in sections if section.enabled]
