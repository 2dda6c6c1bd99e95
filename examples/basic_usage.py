"""Example: a download job that reports progress through eventmixin."""

from __future__ import annotations

import asyncio
import logging

from eventmixin import EmitterConfig, EventEmitterMixin


class DownloadJob(EventEmitterMixin):
    event_emitter_config = EmitterConfig.from_env()

    def __init__(self, url: str) -> None:
        self.url = url

    async def run(self) -> None:
        self.emit("started", self.url)
        for percent in (25, 50, 75, 100):
            await asyncio.sleep(0.05)
            self.emit("progress", percent)
        self.emit("done finished", self.url)


class ProgressPrinter:
    def __init__(self, label: str) -> None:
        self.label = label

    def show(self, percent: int) -> None:
        print(f"[{self.label}] {percent}%")


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    job = DownloadJob("https://example.com/archive.tar.gz")
    printer = ProgressPrinter("archive")

    job.on("started", lambda url: print(f"Downloading {url}"))
    job.on("progress", ProgressPrinter.show, printer)
    job.once("done", lambda url: print(f"Finished {url}"))

    with job.subscribe("finished", lambda url: print("Subscription saw the finish")):
        await job.run()
        await asyncio.sleep(0)

    job.off("progress", ProgressPrinter.show, printer)


if __name__ == "__main__":
    asyncio.run(main())
