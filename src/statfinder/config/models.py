"""Pydantic configuration models for StatFinder components."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

# ============================================================
# Loader Configs
# ============================================================


class SupabaseLoaderConfig(BaseModel):
    """Configuration for SupabaseLoader.

    Credentials come from SUPABASE_URL / SUPABASE_ANON_KEY unless set here.
    """

    type: Literal["supabase"] = "supabase"
    url: str | None = None
    table: str = "cyber_stats"
    timeout: float = 30.0

    model_config = {"frozen": True}


class JsonFileLoaderConfig(BaseModel):
    """Configuration for JsonFileLoader."""

    type: Literal["json_file"] = "json_file"
    path: str

    model_config = {"frozen": True}


LoaderConfig = Annotated[
    SupabaseLoaderConfig | JsonFileLoaderConfig,
    Field(discriminator="type"),
]


# ============================================================
# Search Configs
# ============================================================


class ClaudeSearchConfig(BaseModel):
    """Configuration for ClaudeRelevanceSearcher."""

    type: Literal["claude"] = "claude"
    model: str = "claude-haiku-4-5-20251001"
    max_corpus_records: int = Field(default=200, gt=0)
    max_tokens: int = Field(default=8192, gt=0)

    model_config = {"frozen": True}


SearchConfig = ClaudeSearchConfig


# ============================================================
# Summary Configs
# ============================================================


class ClaudeSummaryConfig(BaseModel):
    """Configuration for ClaudeSummarizer."""

    type: Literal["claude"] = "claude"
    model: str = "claude-haiku-4-5-20251001"
    max_records: int = Field(default=50, gt=0)
    max_tokens: int = Field(default=2048, gt=0)

    model_config = {"frozen": True}


SummaryConfig = ClaudeSummaryConfig


# ============================================================
# Logging Config
# ============================================================


class LoggingConfig(BaseModel):
    """Configuration for application logging."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class StatFinderConfig(BaseModel):
    """Root configuration for StatFinder."""

    loader: SupabaseLoaderConfig | JsonFileLoaderConfig = Field(
        default_factory=SupabaseLoaderConfig, discriminator="type"
    )
    search: ClaudeSearchConfig = Field(default_factory=ClaudeSearchConfig)
    summary: ClaudeSummaryConfig = Field(default_factory=ClaudeSummaryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
