"""next-fast pipeline orchestrator.

Scaffolds a Next.js app and wires Prisma and shadcn/ui into it by driving
external tools in a fixed order:

1. PREFLIGHT  -- make sure the package runner can be launched.
2. CREATE     -- ``bun create next-app`` with the requested switches.
3. ENTER      -- change into the new project directory.
4. PRISMA     -- add dependencies, ``prisma init``, write the schema, ``prisma generate``.
5. SHADCN     -- ``shadcn init``.

The first failure stops the run. Nothing already created is rolled back.

Usage::

    python -m next_fast my-app
    python -m next_fast my-app --no-typescript --skip-install
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
import time
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich.markup import escape
from rich.panel import Panel

from next_fast import __version__
from next_fast.commands import (
    create_app_args,
    prisma_add_args,
    prisma_generate_args,
    prisma_init_args,
    shadcn_init_args,
)
from next_fast.config import RunConfig, ToolchainConfig
from next_fast.schema import write_schema
from next_fast.utils import (
    console,
    error_console,
    format_duration,
    print_error,
    print_step,
    print_substep,
    print_success,
    print_summary_table,
    print_warning,
    run_command,
    tool_available,
)

STEP_NAMES: dict[str, str] = {
    "preflight": "PREFLIGHT",
    "create_app": "CREATE",
    "enter_project": "ENTER",
    "initialize_prisma": "PRISMA",
    "initialize_shadcn": "SHADCN",
}

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Raised when a pipeline step fails."""

    def __init__(self, step: str, message: str) -> None:
        self.step = step
        super().__init__(f"{STEP_NAMES.get(step, step.upper())}: {message}")


# ---------------------------------------------------------------------------
# Pipeline Orchestrator
# ---------------------------------------------------------------------------


class Pipeline:
    """Runs the scaffolding steps in order, stopping at the first failure.

    Attributes:
        config: Options for this run.
        toolchain: Names of the external executables.
        state: Dictionary that accumulates per-step results and timings.
        project_path: Absolute path of the generated project, once known.
    """

    _STEPS: tuple[str, ...] = (
        "preflight",
        "create_app",
        "enter_project",
        "initialize_prisma",
        "initialize_shadcn",
    )

    def __init__(self, config: RunConfig, toolchain: ToolchainConfig | None = None) -> None:
        self.config = config
        self.toolchain = toolchain or ToolchainConfig()
        self.project_path: Path | None = None
        self.state: dict[str, Any] = {
            "started_at": datetime.now(timezone.utc).isoformat(),
            "project_name": config.project_name,
            "steps_completed": [],
            "steps_failed": [],
            "durations": {},
            "success": False,
        }

    async def run(self) -> dict[str, Any]:
        """Execute every step in order.

        Returns:
            The final state dictionary, including a top-level ``success``
            boolean.
        """
        pipeline_start = time.monotonic()
        console.print("[bold bright_blue]Creating Next.js app with Prisma...[/bold bright_blue]")

        all_success = True

        for step in self._STEPS:
            step_start = time.monotonic()
            try:
                await getattr(self, step)()
                self.state["steps_completed"].append(step)

            except ScaffoldError as exc:
                all_success = False
                self.state["steps_failed"].append(step)
                self.state[f"{step}_error"] = str(exc)
                print_error(escape(str(exc)))
                break

            except Exception as exc:
                all_success = False
                self.state["steps_failed"].append(step)
                tb = traceback.format_exc()
                self.state[f"{step}_error"] = tb
                print_error(f"{STEP_NAMES[step]} failed: {escape(str(exc))}")
                error_console.print(f"[dim]{escape(tb)}[/dim]")
                break

            finally:
                self.state["durations"][step] = format_duration(time.monotonic() - step_start)

        total_elapsed = time.monotonic() - pipeline_start
        self.state["success"] = all_success
        self.state["total_duration"] = format_duration(total_elapsed)
        self.state["finished_at"] = datetime.now(timezone.utc).isoformat()

        if all_success:
            self._print_completion()
        return self.state

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    async def preflight(self) -> None:
        """Fail unless the package runner can be launched."""
        runner = self.toolchain.runner
        print_step(f"Checking for {escape(runner)}...")
        if not await tool_available(runner):
            print_warning(
                f"Please install {escape(runner)} from: {escape(self.toolchain.install_url)}"
            )
            raise ScaffoldError("preflight", f"{runner} is not installed or not in PATH")
        print_success(f"{escape(runner)} found!")

    async def create_app(self) -> None:
        print_step(f"Creating Next.js app with {escape(self.toolchain.runner)}...")
        await self._invoke(
            "create_app",
            create_app_args(self.config, self.toolchain),
            "Failed to create Next.js app",
        )
        print_success("Next.js app created successfully!")

    async def enter_project(self) -> Path:
        """Make the generated project the process working directory."""
        target = Path(self.config.project_name)
        try:
            os.chdir(target)
        except OSError as exc:
            raise ScaffoldError(
                "enter_project", f"Cannot enter project directory {target}: {exc}"
            ) from exc
        self.project_path = Path.cwd()
        self.state["project_path"] = str(self.project_path)
        return self.project_path

    async def initialize_prisma(self) -> None:
        """Add Prisma, initialise it, write the schema and generate the client."""
        print_step("Initializing Prisma...")

        print_substep("Adding Prisma dependencies...")
        await self._invoke(
            "initialize_prisma",
            prisma_add_args(self.toolchain),
            "Failed to add Prisma dependencies",
        )

        print_substep("Initializing Prisma schema...")
        await self._invoke(
            "initialize_prisma",
            prisma_init_args(self.toolchain),
            "Failed to initialize Prisma",
        )

        await write_schema(self.toolchain.schema_path)
        print_success("Created basic Prisma schema with User and Post models")

        print_substep("Generating Prisma client...")
        await self._invoke(
            "initialize_prisma",
            prisma_generate_args(self.toolchain),
            "Failed to generate Prisma client",
        )

        print_success("Prisma initialized successfully!")

    async def initialize_shadcn(self) -> None:
        print_step("Initializing shadcn/ui...")
        await self._invoke(
            "initialize_shadcn",
            shadcn_init_args(self.toolchain),
            "Failed to initialize shadcn/ui",
        )
        print_success("shadcn/ui initialized successfully!")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _invoke(self, step: str, args: list[str], failure_message: str) -> None:
        """Run one external command with inherited stdio.

        Raises:
            ScaffoldError: If the command cannot be launched or exits non-zero.
        """
        try:
            returncode, _, _ = await run_command(args, capture=False)
        except OSError as exc:
            raise ScaffoldError(
                step, f"{failure_message}: could not launch {args[0]} ({exc})"
            ) from exc
        if returncode != 0:
            raise ScaffoldError(step, f"{failure_message} (exit code {returncode})")

    def _print_completion(self) -> None:
        console.print()
        print_summary_table(
            {STEP_NAMES[step]: duration for step, duration in self.state["durations"].items()}
            | {"Total": self.state["total_duration"]},
            title="Step timings",
        )
        console.print(
            Panel(
                completion_message(self.config.project_name),
                title="[bold]Project created successfully![/bold]",
                border_style="bold bright_green",
            )
        )


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------


def completion_message(project_name: str) -> str:
    """Return the next-steps text shown after a successful run (Rich markup)."""
    lines = [
        "[bold bright_blue]Next steps:[/bold bright_blue]",
        f"  1. [cyan]cd {escape(project_name)}[/cyan]",
        "  2. [cyan]bunx prisma db push[/cyan]",
        "  3. [cyan]bun dev[/cyan]",
        "",
        "[bold bright_blue]Prisma commands:[/bold bright_blue]",
        "  - [yellow]Push schema to database[/yellow]: [cyan]bunx prisma db push[/cyan]",
        "  - [yellow]Open Prisma Studio[/yellow]: [cyan]bunx prisma studio[/cyan]",
        "  - [yellow]Generate client[/yellow]: [cyan]bunx prisma generate[/cyan]",
        "  - [yellow]Create migration[/yellow]: [cyan]bunx prisma migrate dev[/cyan]",
        "",
        "[bright_magenta]Happy coding![/bright_magenta]",
    ]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="next-fast",
        description="Create a Next.js app with bun and initialize Prisma",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  next-fast my-app\n"
            "  next-fast my-app --no-typescript --no-tailwind\n"
            "  next-fast my-app --skip-install\n"
        ),
    )

    parser.add_argument("project_name", help="Name of the project")
    parser.add_argument(
        "--typescript", "-t",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Use TypeScript (default: on)",
    )
    parser.add_argument(
        "--tailwind",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Use Tailwind CSS (default: on)",
    )
    parser.add_argument(
        "--eslint",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Use ESLint (default: on)",
    )
    parser.add_argument(
        "--app",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Use the App Router (default: on)",
    )
    parser.add_argument(
        "--skip-install",
        action="store_true",
        default=False,
        help="Skip package manager selection prompt",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``next-fast`` and ``python -m next_fast``."""
    args = build_parser().parse_args(argv)

    try:
        config = RunConfig(
            project_name=args.project_name,
            typescript=args.typescript,
            tailwind=args.tailwind,
            eslint=args.eslint,
            app=args.app,
            skip_install=args.skip_install,
        )
    except ValidationError:
        print_error(f"Error: Invalid project name: {escape(repr(args.project_name))}")
        sys.exit(1)

    pipeline = Pipeline(config, ToolchainConfig.from_env())
    result = asyncio.run(pipeline.run())

    if not result.get("success"):
        sys.exit(1)


if __name__ == "__main__":
    main()
