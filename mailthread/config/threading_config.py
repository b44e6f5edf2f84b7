"""Configuration models for threading and correspondence resolution."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ThreadingConfig(BaseModel):
    """
    Thread identity settings.

    ``key_length`` hex characters of a SHA-256 digest are kept. At the
    default of 16 (64 bits) the chance of any collision among ``n``
    conversations is roughly ``n**2 / 2**65``, about 2.7e-8 for one
    million conversations.

    ``similarity_threshold`` is the Jaccard score at or above which two
    messages with the same normalized subject are considered one thread.
    The 0.5 default is a heuristic, not a normative value.
    """

    key_prefix: str = "thread_"
    key_length: int = 16
    similarity_threshold: float = 0.5
    reconcile_conversations: bool = True
    snippet_length: int = 100

    @field_validator("key_length")
    def validate_key_length(cls, v: int) -> int:
        if not 1 <= v <= 64:
            raise ValueError("key_length must be between 1 and 64")
        return v

    @field_validator("similarity_threshold")
    def validate_threshold(cls, v: float) -> float:
        if not 0 < v <= 1:
            raise ValueError("similarity_threshold must be in (0, 1]")
        return v

    @field_validator("snippet_length")
    def validate_snippet_length(cls, v: int) -> int:
        if v < 4:
            raise ValueError("snippet_length must be at least 4")
        return v


class CorrespondenceConfig(BaseModel):
    """Reply/forward draft settings."""

    reply_prefix: str = "Re: "
    forward_prefix: str = "Fwd: "
    date_format: str = "%A, %B %d, %Y at %I:%M %p"
    forward_banner: str = "---------- Forwarded message ---------"
    quote_style: str = "border-left: 3px solid #ccc; margin: 10px 0; padding-left: 15px; color: #666;"


class TracingConfig(BaseModel):
    """Trace sink settings."""

    audit_log_path: Optional[str] = None
    log_level: str = "INFO"

    @field_validator("log_level")
    def validate_log_level(cls, v: str) -> str:
        level = v.upper().strip()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    def get_audit_log_path(self) -> Optional[Path]:
        """Get expanded audit log path, or None when auditing is off."""
        if not self.audit_log_path:
            return None
        return Path(self.audit_log_path).expanduser()


class AppConfig(BaseModel):
    """Main application configuration."""

    schema_version: str = "1.0"
    threading: ThreadingConfig = Field(default_factory=ThreadingConfig)
    correspondence: CorrespondenceConfig = Field(default_factory=CorrespondenceConfig)
    tracing: TracingConfig = Field(default_factory=TracingConfig)

    @field_validator("schema_version")
    def validate_schema_version(cls, v: str) -> str:
        if not v:
            raise ValueError("schema_version is required")
        return v
