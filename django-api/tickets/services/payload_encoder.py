"""Payload encoding for ticket identity data.

A payload joins purchase id, holder name and line item id with a delimiter
that may not appear in any field, so the same inputs always produce the same
payload and the payload can be used as a lookup key.
"""

from urllib.parse import urlencode

from tickets.domain import RenderRequest
from tickets.domain.errors import EncodingError

DEFAULT_DELIMITER = "|"
DEFAULT_RENDER_BASE_URL = "https://api.qrserver.com/v1/create-qr-code/"
DEFAULT_RENDER_SIZE = "150x150"
MAX_PAYLOAD_LENGTH = 512


class PayloadEncoder:
    """Builds ticket payloads and render requests. Pure, no I/O."""

    def __init__(
        self,
        delimiter: str = DEFAULT_DELIMITER,
        render_base_url: str = DEFAULT_RENDER_BASE_URL,
        render_size: str = DEFAULT_RENDER_SIZE,
    ) -> None:
        if not delimiter:
            raise ValueError("Delimiter cannot be empty")
        self._delimiter = delimiter
        self._render_base_url = render_base_url
        self._render_size = render_size

    @property
    def delimiter(self) -> str:
        return self._delimiter

    def encode(self, purchase_id: str, holder_name: str, line_item_id: str) -> str:
        """Return the payload for a ticket.

        Raises:
            EncodingError: If a field is empty, contains the delimiter or a NUL, or the
                payload is too long to store.
        """
        fields = {
            "purchase_id": purchase_id,
            "holder_name": holder_name,
            "line_item_id": line_item_id,
        }
        for name, value in fields.items():
            if not value:
                raise EncodingError(name, "value is empty")
            if self._delimiter in value:
                raise EncodingError(name, f"value contains delimiter {self._delimiter!r}")
            if "\x00" in value:
                raise EncodingError(name, "value contains a NUL character")
        payload = self._delimiter.join(fields.values())
        if len(payload) > MAX_PAYLOAD_LENGTH:
            raise EncodingError("payload", f"longer than {MAX_PAYLOAD_LENGTH} characters")
        return payload

    def render_request(self, payload: str) -> RenderRequest:
        """Return the request descriptor for the external rendering service."""
        query = urlencode({"data": payload, "size": self._render_size})
        return RenderRequest(
            url=f"{self._render_base_url}?{query}",
            data=payload,
            size=self._render_size,
        )
