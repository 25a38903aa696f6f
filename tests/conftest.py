import asyncio
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from rtsp_resolver.config import reset_config  # noqa: E402
from rtsp_resolver.container import reset_container  # noqa: E402
from rtsp_resolver.exceptions import ResolutionConnectionError  # noqa: E402
from rtsp_resolver.models import Source  # noqa: E402


class FakeResolver:
    """Resolver stand-in with scripted destinations, failures and an optional gate."""

    def __init__(
        self,
        destinations: Optional[Dict[str, str]] = None,
        failures: Iterable[str] = (),
        gate: Optional[asyncio.Event] = None,
    ) -> None:
        self.destinations = destinations or {}
        self.failures = set(failures)
        self.gate = gate
        self.calls: List[str] = []
        self.started = 0

    async def resolve(self, source: Source) -> Source:
        self.calls.append(source.original)
        self.started += 1
        if self.gate is not None:
            await self.gate.wait()
        if source.original in self.failures:
            raise ResolutionConnectionError(source.original, ConnectionRefusedError("refused"))
        return source.with_resolved(self.destinations.get(source.original, source.original + "#final"))


# (status, reason, headers, body)
RtspReply = Tuple[int, str, Dict[str, str], bytes]


class FakeRtspServer:
    """
    Tiny RTSP server on 127.0.0.1 for resolver tests.

    ``handler(method, url, headers)`` is a coroutine returning an RtspReply.
    """

    def __init__(self, handler) -> None:
        self.handler = handler
        self.requests: List[Dict[str, object]] = []
        self.port: Optional[int] = None
        self._server: Optional[asyncio.AbstractServer] = None
        self._tasks = set()

    def url(self, path: str = "/stream") -> str:
        return f"rtsp://127.0.0.1:{self.port}{path}"

    async def __aenter__(self) -> "FakeRtspServer":
        self._server = await asyncio.start_server(self._handle, "127.0.0.1", 0)
        self.port = self._server.sockets[0].getsockname()[1]
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self._server.close()
        for task in list(self._tasks):
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        await self._server.wait_closed()

    async def _handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        task = asyncio.current_task()
        self._tasks.add(task)
        try:
            while True:
                request_line = await reader.readline()
                if not request_line:
                    break
                method, url, _ = request_line.decode().strip().split(" ", 2)
                headers: Dict[str, str] = {}
                while True:
                    line = (await reader.readline()).decode().strip()
                    if not line:
                        break
                    name, value = line.split(":", 1)
                    headers[name.strip().lower()] = value.strip()
                self.requests.append({"method": method, "url": url, "headers": headers})

                status, reason, reply_headers, body = await self.handler(method, url, headers)
                reply_headers = dict(reply_headers)
                cseq = reply_headers.pop("CSeq", headers.get("cseq", "0"))
                lines = [f"RTSP/1.0 {status} {reason}", f"CSeq: {cseq}"]
                lines.extend(f"{name}: {value}" for name, value in reply_headers.items())
                if body:
                    lines.append(f"Content-Length: {len(body)}")
                writer.write(("\r\n".join(lines) + "\r\n\r\n").encode() + body)
                await writer.drain()
        except (ConnectionError, asyncio.CancelledError):
            pass
        finally:
            self._tasks.discard(task)
            writer.close()


SDP_BODY = b"v=0\r\no=- 0 0 IN IP4 127.0.0.1\r\ns=Stream\r\nt=0 0\r\nm=video 0 RTP/AVP 96\r\n"


def ok_reply() -> RtspReply:
    return 200, "OK", {"Content-Type": "application/sdp"}, SDP_BODY


@pytest.fixture
def fake_resolver_factory():
    def _factory(
        destinations: Optional[Dict[str, str]] = None,
        failures: Iterable[str] = (),
        gate: Optional[asyncio.Event] = None,
    ) -> FakeResolver:
        return FakeResolver(destinations, failures, gate)

    return _factory


@pytest.fixture(autouse=True)
def fresh_container():
    reset_config()
    reset_container()
    yield
    reset_config()
    reset_container()


@pytest.fixture
def rtsp_server_factory():
    def _factory(handler) -> FakeRtspServer:
        return FakeRtspServer(handler)

    return _factory


@pytest.fixture
def sdp_ok():
    return ok_reply
