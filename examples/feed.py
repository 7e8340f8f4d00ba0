"""Fan a pipeline out over several inputs with Mux, then fold back in."""

from __future__ import annotations

import asyncio
import logging

from promix import Mix, QuorumError, mux

logging.basicConfig(level=logging.INFO)

USERS = {
    "dumbass": {"name": "Dumb Ass", "interests": ["cash", "TV", "girls"]},
    "smartass": {"name": "Smart Ass", "interests": ["reading", "chess"]},
}


async def lookup(user_id: str) -> dict:
    await asyncio.sleep(0.01)
    return {"id": user_id, **USERS[user_id]}


async def main() -> None:
    profiles = await (
        mux(list(USERS))
        .reduce([lookup, lambda user: f"{user['name']} likes {', '.join(user['interests'])}"])
        .de_mux()
    )
    print(profiles)

    lengths = await Mix.start(["Annie", "Lawrence", "Silvio"]).map_items(len).log("Lengths:")
    print(lengths)

    try:
        await Mix.start("Andy").xor([lambda: "Sandy"])
    except QuorumError as exc:
        print("xor failed:", exc)


if __name__ == "__main__":
    asyncio.run(main())
