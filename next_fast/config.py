"""next-fast configuration.

Typed configuration for a scaffolding run. All settings use Pydantic v2
models so they are validated at construction time: ``RunConfig`` carries the
options parsed from the command line, ``ToolchainConfig`` names the external
executables the pipeline drives.
"""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RunConfig(BaseModel):
    """Options for a single scaffolding run.

    Built once by the CLI entry point and never mutated afterwards. Each
    boolean toggle maps to one of two mutually exclusive ``create next-app``
    switches.
    """

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., min_length=1, description="Directory name of the new app")
    typescript: bool = Field(default=True, description="TypeScript instead of JavaScript")
    tailwind: bool = Field(default=True, description="Configure Tailwind CSS")
    eslint: bool = Field(default=True, description="Configure ESLint")
    app: bool = Field(default=True, description="Use the App Router")
    skip_install: bool = Field(
        default=False, description="Skip the package manager selection prompt"
    )


class ToolchainConfig(BaseModel):
    """External executables and fixed paths used by the pipeline."""

    runner: str = Field(default="bun", min_length=1)
    executor: str = Field(default="bunx", min_length=1)
    shadcn_package: str = Field(default="shadcn@latest", min_length=1)
    install_url: str = Field(default="https://bun.sh")
    schema_path: str = Field(default="prisma/schema.prisma")

    @classmethod
    def from_env(cls) -> "ToolchainConfig":
        """Build a ``ToolchainConfig`` from environment variables.

        Recognised variables (all optional):
            NEXT_FAST_RUNNER, NEXT_FAST_EXECUTOR, NEXT_FAST_SHADCN_PACKAGE.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("NEXT_FAST_RUNNER"):
            kwargs["runner"] = os.environ["NEXT_FAST_RUNNER"]
        if os.environ.get("NEXT_FAST_EXECUTOR"):
            kwargs["executor"] = os.environ["NEXT_FAST_EXECUTOR"]
        if os.environ.get("NEXT_FAST_SHADCN_PACKAGE"):
            kwargs["shadcn_package"] = os.environ["NEXT_FAST_SHADCN_PACKAGE"]
        return cls(**kwargs)
