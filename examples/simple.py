#!/usr/bin/env python3
"""Sequential actions: sync and async steps threading one value through."""

from __future__ import annotations

import asyncio
import logging

import conveyor


async def fetch_numbers() -> list[int]:
    await asyncio.sleep(0.05)
    return [1, 2, 3]


async def main() -> None:
    io = conveyor.conveyor(name="simple")
    io.do(
        conveyor.say("Hello"),
        fetch_numbers,
        conveyor.log,
        lambda nums: nums + [4],
        conveyor.sleep(20),
        conveyor.when(lambda nums: len(nums) > 3, conveyor.say("Got more than three numbers")),
        conveyor.log,
    )
    total = await io.then(sum)
    print(f"Round trip is complete, total={total}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")
    asyncio.run(main())
