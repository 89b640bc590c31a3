"""
scope_context — Hello World

Every scope is one JSON document. Reads are cached; every write
persists the whole document and invalidates the cache for that scope.

Runs against an in-memory blob store. Pass no ``blob_store`` (and set
SCOPE_CONTEXT_BUCKET / AWS credentials) to talk to S3 instead.
"""

import asyncio
import logging

from scope_context import MISSING, ScopeContext
from scope_context.blobs import InMemoryBlobStore


async def main():
    logging.basicConfig(level=logging.DEBUG, format="  [%(levelname)s] %(message)s")
    blobs = InMemoryBlobStore()

    async with ScopeContext(bucket="demo-bucket", prefix="demo", blob_store=blobs) as ctx:
        # ──────────────────────────────────────
        #  1. Unknown scopes read as empty
        # ──────────────────────────────────────
        (user,) = await ctx.get("session-42", "user")
        print(f"user before write: {user!r}")

        # ──────────────────────────────────────
        #  2. Write several keys at once
        # ──────────────────────────────────────
        await ctx.set("session-42", ["user", "step", "cart"], ["alice", 1, ["sku-1"]])
        print(f"stored at: {ctx.path_for('session-42')}")
        print(f"body:      {(await blobs.fetch(ctx.path_for('session-42'))).decode()}")

        # ──────────────────────────────────────
        #  3. Next read reloads from the store, then serves from cache
        # ──────────────────────────────────────
        user, step, coupon = await ctx.get("session-42", ["user", "step", "coupon"])
        print(f"user={user} step={step} coupon missing={coupon is MISSING}")
        print(f"keys: {await ctx.keys('session-42')}")

        # ──────────────────────────────────────
        #  4. Delete is idempotent
        # ──────────────────────────────────────
        await ctx.clean(["session-42", "never-existed"])
        print(f"after clean: {await ctx.keys('session-42')}")


if __name__ == "__main__":
    asyncio.run(main())
