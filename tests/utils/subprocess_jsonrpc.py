"""JSON-RPC client for talking to the stdio server in a subprocess.

A background reader task drains stdout and resolves pending requests by id,
which avoids the deadlock that comes from interleaving ``stdin.write()``
with ``stdout.readline()`` on the same task.

See: https://docs.python.org/3/library/asyncio-subprocess.html#asyncio-subprocess-streams
"""

import asyncio
import json
from typing import Any, cast

from loguru import logger


class SubprocessJsonRpcError(Exception):
    """Base exception for JSON-RPC subprocess communication errors."""


class SubprocessCrashError(SubprocessJsonRpcError):
    """Raised when the subprocess terminates unexpectedly."""


class JsonRpcTimeoutError(SubprocessJsonRpcError):
    """Raised when a JSON-RPC request times out."""


class JsonRpcResponseError(SubprocessJsonRpcError):
    """Raised when a JSON-RPC response contains an error."""

    def __init__(self, code: int, message: str, data: dict[str, Any] | None = None):
        self.code = code
        self.message = message
        self.data = data
        super().__init__(f"JSON-RPC error {code}: {message}")


class SubprocessJsonRpcClient:
    """JSON-RPC client over a subprocess's stdin/stdout.

    Example usage:
        proc = await asyncio.create_subprocess_exec(
            sys.executable, "-m", "slackreader", "mcp",
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )

        client = SubprocessJsonRpcClient(proc)
        await client.start()
        try:
            await client.send_request("initialize", {...}, timeout=10.0)
            await client.send_notification("notifications/initialized")
            tools = await client.send_request("tools/list", {})
        finally:
            await client.close()
    """

    def __init__(self, process: asyncio.subprocess.Process):
        if process.stdin is None:
            raise ValueError("Process must have stdin pipe")
        if process.stdout is None:
            raise ValueError("Process must have stdout pipe")

        self._process = process
        self._reader_task: asyncio.Task[None] | None = None
        self._pending_requests: dict[int, asyncio.Future[dict[str, Any]]] = {}
        self._next_request_id = 1
        self._closed = False

    async def start(self) -> None:
        """Start the background reader task; call before sending requests."""
        if self._reader_task is not None:
            raise RuntimeError("Client already started")
        self._reader_task = asyncio.create_task(self._read_responses())

    async def _write(self, message: dict[str, Any]) -> None:
        assert self._process.stdin is not None
        self._process.stdin.write((json.dumps(message) + "\n").encode("utf-8"))
        try:
            await self._process.stdin.drain()
        except (BrokenPipeError, ConnectionResetError) as e:
            raise SubprocessCrashError(f"Subprocess crashed during send: {e}") from e

    def _ensure_open(self) -> None:
        if self._reader_task is None:
            raise RuntimeError("Client not started - call start() first")
        if self._closed:
            raise RuntimeError("Client is closed")

    async def send_request(
        self, method: str, params: dict[str, Any] | None = None, timeout: float = 5.0
    ) -> dict[str, Any]:
        """Send a request and return its ``result`` object.

        Raises:
            JsonRpcTimeoutError: If the request times out.
            JsonRpcResponseError: If the response contains an error.
            SubprocessCrashError: If the subprocess terminates unexpectedly.
        """
        self._ensure_open()

        request_id = self._next_request_id
        self._next_request_id += 1

        response_future: asyncio.Future[dict[str, Any]] = (
            asyncio.get_running_loop().create_future()
        )
        self._pending_requests[request_id] = response_future

        request: dict[str, Any] = {"jsonrpc": "2.0", "id": request_id, "method": method}
        if params is not None:
            request["params"] = params

        try:
            await self._write(request)
            try:
                response = await asyncio.wait_for(response_future, timeout=timeout)
            except asyncio.TimeoutError:
                raise JsonRpcTimeoutError(
                    f"Request {method} (id={request_id}) timed out after {timeout}s"
                )

            if "error" in response:
                error = response["error"]
                raise JsonRpcResponseError(
                    code=error.get("code", -1),
                    message=error.get("message", "Unknown error"),
                    data=error.get("data"),
                )
            if "result" not in response:
                raise SubprocessJsonRpcError(
                    f"Response missing 'result' field: {response}"
                )
            return cast(dict[str, Any], response["result"])
        finally:
            self._pending_requests.pop(request_id, None)

    async def send_notification(
        self, method: str, params: dict[str, Any] | None = None
    ) -> None:
        """Send a notification (no response expected)."""
        self._ensure_open()
        notification: dict[str, Any] = {"jsonrpc": "2.0", "method": method}
        if params is not None:
            notification["params"] = params
        await self._write(notification)

    async def close(self) -> None:
        """Terminate the subprocess and stop the reader task."""
        if self._closed:
            return
        self._closed = True

        if self._process.stdin is not None and not self._process.stdin.is_closing():
            self._process.stdin.close()

        if self._process.returncode is None:
            self._process.terminate()
            try:
                await asyncio.wait_for(self._process.wait(), timeout=3.0)
            except asyncio.TimeoutError:
                logger.warning("Subprocess didn't terminate, killing it")
                self._process.kill()
                await self._process.wait()

        if self._reader_task is not None:
            self._reader_task.cancel()
            try:
                await asyncio.wait_for(self._reader_task, timeout=0.5)
            except (asyncio.CancelledError, asyncio.TimeoutError):
                pass

        for future in self._pending_requests.values():
            if not future.done():
                future.cancel()
        self._pending_requests.clear()

    async def _read_responses(self) -> None:
        """Read responses from stdout and resolve pending requests by id."""
        assert self._process.stdout is not None
        try:
            while True:
                line_bytes = await self._process.stdout.readline()
                if not line_bytes:
                    self._handle_subprocess_terminated()
                    break

                line = line_bytes.decode("utf-8").strip()
                if not line:
                    continue
                try:
                    response = json.loads(line)
                except json.JSONDecodeError as e:
                    logger.error(f"Failed to parse JSON response: {line!r} - {e}")
                    continue

                request_id = response.get("id")
                if request_id is None:
                    logger.debug(f"Received notification: {response}")
                    continue
                future = self._pending_requests.get(request_id)
                if future is not None and not future.done():
                    future.set_result(response)
                else:
                    logger.warning(f"Response for unknown request id={request_id}")
        except asyncio.CancelledError:
            pass

    def _handle_subprocess_terminated(self) -> None:
        """Fail every pending request with ``SubprocessCrashError``."""
        error = SubprocessCrashError(
            "Subprocess terminated unexpectedly "
            f"(exit code: {self._process.returncode})"
        )
        for future in self._pending_requests.values():
            if not future.done():
                future.set_exception(error)
        self._pending_requests.clear()
