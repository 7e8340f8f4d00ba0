from __future__ import annotations

import asyncio

from promix import combine, f_combine

POSTS = [
    {"author": "dumbass", "text": "YOLO!!!"},
    {"author": "smartass", "text": "E = mc^2"},
]


async def select_user(user_id: str) -> dict:
    await asyncio.sleep(0.01)
    return {"id": user_id, "name": "Dumb Ass"}


async def user_with_posts(user_id: str) -> dict:
    """Each step sees what the previous steps produced."""
    return await combine({
        "user": lambda: select_user(user_id),
        "posts": lambda acc: [post for post in POSTS if post["author"] == acc["user"]["id"]],
    })


async def user_with_posts_callbacks(user_id: str) -> dict:
    """Same, written with (error, result) callbacks."""
    def user(_acc, done):
        done(None, {"id": user_id})

    def posts(acc, done):
        done(None, [post for post in POSTS if post["author"] == acc["user"]["id"]])

    return await f_combine({"user": user, "posts": posts})


if __name__ == "__main__":
    print(asyncio.run(user_with_posts("dumbass")))
    print(asyncio.run(user_with_posts_callbacks("smartass")))
