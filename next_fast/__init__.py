"""next-fast -- scaffold a Next.js app with bun, Prisma and shadcn/ui.

Quick usage::

    from next_fast import Pipeline, RunConfig

    pipeline = Pipeline(RunConfig(project_name="my-app"))
    state = await pipeline.run()
"""

__version__ = "0.1.0"

from next_fast.config import RunConfig, ToolchainConfig  # noqa: E402
from next_fast.pipeline import Pipeline, ScaffoldError  # noqa: E402

__all__ = [
    "Pipeline",
    "RunConfig",
    "ScaffoldError",
    "ToolchainConfig",
    "__version__",
]
