from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class ReporterConfig(BaseSettings):
    """Reporter configuration loaded from environment variables."""

    base_dir: Path | None = Field(default=None, description="Directory feature file paths are relative to")
    undefined_marker: str = Field(
        default=" (undefined step)", description="Substring the runner appends to undefined step titles"
    )

    # Report
    header: str = Field(default="Please implement the following pending steps:")
    snippet_body: str = Field(default="// Implement me!", description="Placeholder body line of each snippet")
    snippet_indent: str = Field(default="\t")
    import_module: str = Field(default="@cucumber/cucumber", description="Module named in the import hint line")
    report_style: str = Field(default="yellow", description="rich style applied to report lines")

    class Config:
        env_file = ".env"
        env_prefix = "MISSING_STEPS_"
        extra = "ignore"
