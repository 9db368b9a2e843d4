"""Argument lists for every external command the pipeline runs.

Pure functions only: nothing here touches the filesystem or spawns a
process, so the flag translation can be checked exhaustively in tests.
"""

from __future__ import annotations

from next_fast.config import RunConfig, ToolchainConfig

# (RunConfig field, switch when enabled, switch when disabled)
SWITCH_PAIRS: tuple[tuple[str, str, str], ...] = (
    ("typescript", "--typescript", "--javascript"),
    ("tailwind", "--tailwind", "--no-tailwind"),
    ("eslint", "--eslint", "--no-eslint"),
    ("app", "--app", "--no-app"),
)

SKIP_INSTALL_SWITCH = "--skip-install"

DATASOURCE_PROVIDER = "sqlite"


def create_app_args(config: RunConfig, toolchain: ToolchainConfig) -> list[str]:
    """Build the ``create next-app`` invocation for *config*.

    Exactly one switch of each pair in ``SWITCH_PAIRS`` is appended, in
    table order, followed by ``--skip-install`` when requested.
    """
    args = [toolchain.runner, "create", "next-app", config.project_name]
    for field, on_switch, off_switch in SWITCH_PAIRS:
        args.append(on_switch if getattr(config, field) else off_switch)
    if config.skip_install:
        args.append(SKIP_INSTALL_SWITCH)
    return args


def prisma_add_args(toolchain: ToolchainConfig) -> list[str]:
    return [toolchain.runner, "add", "prisma", "@prisma/client"]


def prisma_init_args(toolchain: ToolchainConfig) -> list[str]:
    return [
        toolchain.executor,
        "prisma",
        "init",
        "--datasource-provider",
        DATASOURCE_PROVIDER,
    ]


def prisma_generate_args(toolchain: ToolchainConfig) -> list[str]:
    return [toolchain.executor, "prisma", "generate"]


def shadcn_init_args(toolchain: ToolchainConfig) -> list[str]:
    return [toolchain.executor, toolchain.shadcn_package, "init"]
