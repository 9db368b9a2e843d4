"""The Prisma schema written into every scaffolded project."""

from __future__ import annotations

import asyncio
from pathlib import Path

PRISMA_SCHEMA = """\
// This is your Prisma schema file,
// learn more about it in the docs: https://pris.ly/d/prisma-schema

generator client {
  provider = "prisma-client-js"
}

datasource db {
  provider = "sqlite"
  url      = env("DATABASE_URL")
}

model User {
  id        Int      @id @default(autoincrement())
  email     String   @unique
  name      String?
  createdAt DateTime @default(now())
  updatedAt DateTime @updatedAt
  posts     Post[]
}

model Post {
  id        Int      @id @default(autoincrement())
  title     String
  content   String?
  published Boolean  @default(false)
  createdAt DateTime @default(now())
  updatedAt DateTime @updatedAt
  author    User     @relation(fields: [authorId], references: [id])
  authorId  Int
}
"""


async def write_schema(path: str | Path) -> Path:
    """Overwrite *path* with ``PRISMA_SCHEMA``.

    The parent directory must already exist (``prisma init`` creates it).
    Filesystem errors are not caught.

    Returns:
        The path that was written.
    """
    target = Path(path)
    data = PRISMA_SCHEMA.encode("utf-8")
    await asyncio.to_thread(target.write_bytes, data)
    return target
