from __future__ import annotations

import asyncio

from promix import Mix, aggregate


async def fetch(items: list[str]) -> list[str]:
    await asyncio.sleep(0.01)
    return items


async def get_stuff() -> dict:
    """Organize unlinked results."""
    return await aggregate({
        "apples": fetch(["Green Apple", "Red Apple"]),
        "dogs": fetch(["Lessie", "Milo"]),
    })


async def add_animals(stuff_i_like: dict) -> dict:
    """Add items to a mapping, retrieving them asynchronously."""
    return await aggregate({
        "cats": fetch(["Felix", "Garfield"]),
        "dogs": fetch(["Lessie", "Milo"]),
    }, stuff_i_like)


async def update_stuff(stuff: dict) -> dict:
    return await Mix.start(stuff).aggregate({
        "cats": fetch(stuff["cats"] + ["Tom"]),
        "dogs": fetch(stuff["dogs"] + ["Rex"]),
    })


async def main() -> None:
    stuff = await get_stuff()
    print("Stuff:", stuff)
    animals = await add_animals(stuff)
    print("With animals:", animals)
    print("Updated:", await update_stuff(animals))


if __name__ == "__main__":
    asyncio.run(main())
