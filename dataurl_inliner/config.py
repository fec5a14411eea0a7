import re
from typing import List, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from dataurl_inliner.constants import DEFAULT_LIMIT, USER_AGENT
from dataurl_inliner.processors import normalize_extensions
from dataurl_inliner.rules import RuleConfig


# Configuration
class Config(BaseSettings):
    """Inliner settings, read from DATAURL_* environment variables or .env."""

    # Rules
    remote: bool = False
    extensions: Optional[Union[str, List[str]]] = None
    include: Optional[List[str]] = None
    exclude: Optional[List[str]] = None
    include_patterns: Optional[List[str]] = None
    exclude_patterns: Optional[List[str]] = None
    limit: int = Field(default=DEFAULT_LIMIT, ge=0)

    # Network
    request_timeout: float = Field(default=30.0, ge=1.0)
    user_agent: str = USER_AGENT

    # Concurrency
    max_concurrency: int = Field(default=4, ge=1, le=64)

    model_config = {
        "env_prefix": "DATAURL_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("extensions", mode="before")
    @classmethod
    def validate_extensions(cls, v):
        if v is None:
            return None
        return normalize_extensions(v) or None

    @field_validator("include_patterns", "exclude_patterns")
    @classmethod
    def validate_patterns(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return None
        for pattern in v:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid pattern {pattern!r}: {e}") from e
        return v

    def to_rules(self) -> RuleConfig:
        """Build the immutable rule set; literals and patterns share one include/exclude list."""
        return RuleConfig.build(
            remote=self.remote,
            extensions=self.extensions,
            include=self._entries(self.include, self.include_patterns),
            exclude=self._entries(self.exclude, self.exclude_patterns),
            limit=self.limit,
        )

    @staticmethod
    def _entries(literals: Optional[List[str]], patterns: Optional[List[str]]):
        if literals is None and patterns is None:
            return None
        return list(literals or []) + [re.compile(p) for p in patterns or []]
