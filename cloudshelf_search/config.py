"""
Configuration module for catalog search.

Thresholds and timings are managed with Pydantic settings. Every value can
be overridden through ``CLOUDSHELF_SEARCH_*`` environment variables and is
validated on instantiation.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "CLOUDSHELF_SEARCH_"


class SearchConfig(BaseSettings):
    """
    Tunables for the search pipeline.

    Explicit keyword arguments win over environment variables, which win
    over the defaults.

    Attributes:
        debounce_ms: Quiet period before a typed query is searched
        fuzzy_threshold: Minimum word similarity counted as a fuzzy hit
        min_match_quality: Admission floor on best observed similarity
        min_score: Admission floor on accumulated relevance score
        fetch_limit: Page size requested from the catalog
    """

    debounce_ms: int = Field(
        default=300,
        ge=0,
        description="Quiet period in milliseconds before a typed query is searched",
    )
    fuzzy_threshold: float = Field(
        default=0.6,
        ge=0.0,
        le=1.0,
        description="Minimum word similarity counted as a fuzzy hit",
    )
    min_match_quality: float = Field(
        default=0.4,
        ge=0.0,
        le=1.0,
        description="Admission floor on the best observed similarity",
    )
    min_score: float = Field(
        default=15.0,
        ge=0.0,
        description="Admission floor on the accumulated relevance score",
    )
    fetch_limit: int = Field(
        default=1000,
        ge=1,
        description="Page size requested from the catalog",
    )

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX) -> "SearchConfig":
        """
        Load configuration from environment variables under another prefix.

        Reads ``<prefix>DEBOUNCE_MS``, ``<prefix>FUZZY_THRESHOLD``,
        ``<prefix>MIN_MATCH_QUALITY``, ``<prefix>MIN_SCORE`` and
        ``<prefix>FETCH_LIMIT``; unset or empty variables keep their defaults.

        Raises:
            pydantic.ValidationError: If a variable is not a valid number
                or is out of range
        """
        return cls(_env_prefix=prefix)
