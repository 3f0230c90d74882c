"""UDP listener feeding datagrams into the record pipeline."""

from __future__ import annotations

import asyncio
from typing import Optional, Set, Tuple

from wavelogstoat.core.logging import log_error, log_info
from wavelogstoat.pipeline import RecordPipeline


class ContactDatagramProtocol(asyncio.DatagramProtocol):
    """Hand each received datagram to the listener as its own task."""

    def __init__(self, listener: "UDPListener"):
        self.listener = listener

    def datagram_received(self, data: bytes, addr: Tuple[str, int]) -> None:
        message = data.decode("utf-8", errors="replace")
        log_info("datagram_received", size=len(data), source=f"{addr[0]}:{addr[1]}")
        if self.listener.verbose:
            log_info("datagram_content", content=message)
        self.listener.dispatch(message)

    def error_received(self, exc: Exception) -> None:
        log_error("udp_read_error", error=str(exc))


class UDPListener:
    """Bind a UDP socket and process datagrams with bounded concurrency.

    At most ``max_workers`` payloads are in the pipeline at once; further
    datagrams wait for a free slot.
    """

    def __init__(
        self,
        pipeline: RecordPipeline,
        host: str = "0.0.0.0",
        port: int = 2333,
        max_workers: int = 8,
        verbose: bool = False,
    ):
        self.pipeline = pipeline
        self.host = host
        self.port = port
        self.verbose = verbose
        self._slots = asyncio.Semaphore(max_workers)
        self._tasks: Set[asyncio.Task] = set()
        self._transport: Optional[asyncio.DatagramTransport] = None

    @property
    def address(self) -> Optional[Tuple[str, int]]:
        """Address actually bound, useful when port 0 was requested."""
        if self._transport is None:
            return None
        return self._transport.get_extra_info("sockname")[:2]

    async def start(self) -> None:
        loop = asyncio.get_running_loop()
        self._transport, _ = await loop.create_datagram_endpoint(
            lambda: ContactDatagramProtocol(self),
            local_addr=(self.host, self.port),
        )
        log_info("udp_listening", host=self.host, port=self.address[1])

    def dispatch(self, message: str) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(self._run(message))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, message: str) -> None:
        async with self._slots:
            try:
                await self.pipeline.process_message(message)
            except Exception as e:
                log_error("message_processing_error", error=str(e))

    async def close(self) -> None:
        """Stop receiving and wait for in-flight payloads to finish."""
        if self._transport is not None:
            self._transport.close()
            self._transport = None
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def serve_forever(self) -> None:
        await self.start()
        try:
            await asyncio.Event().wait()
        finally:
            await self.close()
