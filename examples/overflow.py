#!/usr/bin/env python3
"""Burst enqueue: actions beyond the queue capacity wait in the buffer.

Also shows an error handler and the engine trace.
"""

from __future__ import annotations

import asyncio
import logging

import conveyor


def report(error: BaseException) -> None:
    print(f"handled: {error!r}")


async def main() -> None:
    results: list[int] = []
    io = conveyor.conveyor(error=report, trace=True, name="burst")

    io.do_all([conveyor.as_action(results.append, i) for i in range(10)])
    io.do(
        conveyor.throw(ValueError("something went wrong")),
        conveyor.do_simultaneously(
            conveyor.sleep(10),
            conveyor.say("fired alongside the sleep"),
        ),
        conveyor.sequence(conveyor.sleep(10), conveyor.say("sequence finished")),
    )
    print("complete right after enqueue?", io.is_complete())

    async with io:
        pass

    print("results:", results)
    print("drains:", len(io.trace.find_all(action="drain")))
    print("errors:", [e.info["error"] for e in io.trace.find_all(action="action_error")])


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")
    asyncio.run(main())
