"""Response interceptor wrapping the ASGI ``send`` callable.

The interceptor is itself a valid ``send``: the downstream app calls it
exactly as it would call the real one.  Every message is forwarded
unchanged; the interceptor only remembers the status code of the first
``http.response.start`` message and counts the body bytes the real sink
accepted.
"""

from starlette.types import Message, Send

_DEFAULT_STATUS = 200


class ResponseInterceptor:
    """Per-request decorator around an ASGI ``send``."""

    def __init__(self, send: Send) -> None:
        self._send = send
        self._status_set = False
        self.status_code: int = _DEFAULT_STATUS
        self.bytes_written: int = 0

    @property
    def response_started(self) -> bool:
        """True once a ``http.response.start`` message has gone through."""
        return self._status_set

    async def __call__(self, message: Message) -> None:
        message_type = message["type"]
        if message_type == "http.response.start":
            await self.set_status(message)
        elif message_type == "http.response.body":
            await self.write(message)
        else:
            await self._send(message)

    async def set_status(self, message: Message) -> None:
        """Record the status of the first start message, then forward it."""
        if not self._status_set:
            self.status_code = int(message["status"])
            self._status_set = True
        await self._send(message)

    async def write(self, message: Message) -> int:
        """Forward a body message and return the number of bytes accepted.

        Errors raised by the underlying sink propagate and leave the byte
        count untouched.
        """
        await self._send(message)
        written = len(message.get("body", b""))
        self.bytes_written += written
        return written
