"""Unit tests for PayloadEncoder.

Run with: pytest tests/test_payload_encoder.py -v
"""

from urllib.parse import parse_qs, urlparse

import pytest

from tickets.domain.errors import EncodingError
from tickets.services import PayloadEncoder
from tickets.services.payload_encoder import MAX_PAYLOAD_LENGTH


class TestEncode:
    """Tests for PayloadEncoder.encode."""

    def test_joins_fields_with_delimiter(self, encoder):
        assert encoder.encode("P1", "Jane Doe", "L1") == "P1|Jane Doe|L1"

    def test_is_deterministic(self, encoder):
        assert encoder.encode("P1", "Jane Doe", "L1") == encoder.encode("P1", "Jane Doe", "L1")

    @pytest.mark.parametrize(
        "args",
        [
            ("P2", "Jane Doe", "L1"),
            ("P1", "John Doe", "L1"),
            ("P1", "Jane Doe", "L2"),
        ],
    )
    def test_changing_any_field_changes_payload(self, encoder, args):
        assert encoder.encode(*args) != encoder.encode("P1", "Jane Doe", "L1")

    @pytest.mark.parametrize("field_index,field_name", [(0, "purchase_id"), (1, "holder_name"), (2, "line_item_id")])
    def test_rejects_empty_field(self, encoder, field_index, field_name):
        args = ["P1", "Jane Doe", "L1"]
        args[field_index] = ""
        with pytest.raises(EncodingError) as exc_info:
            encoder.encode(*args)
        assert exc_info.value.field_name == field_name

    def test_rejects_field_containing_delimiter(self, encoder):
        with pytest.raises(EncodingError) as exc_info:
            encoder.encode("P1", "Jane|Doe", "L1")
        assert exc_info.value.field_name == "holder_name"

    def test_rejects_field_containing_nul(self, encoder):
        with pytest.raises(EncodingError) as exc_info:
            encoder.encode("P1", "Jane\x00Doe", "L1")
        assert exc_info.value.field_name == "holder_name"

    def test_rejects_payload_longer_than_storable(self, encoder):
        with pytest.raises(EncodingError) as exc_info:
            encoder.encode("P1", "J" * (MAX_PAYLOAD_LENGTH - 5), "L1")
        assert exc_info.value.field_name == "payload"

    def test_accepts_payload_at_storable_limit(self, encoder):
        payload = encoder.encode("P1", "J" * (MAX_PAYLOAD_LENGTH - 6), "L1")
        assert len(payload) == MAX_PAYLOAD_LENGTH

    def test_custom_delimiter(self):
        encoder = PayloadEncoder(delimiter="::")
        assert encoder.encode("P1", "Jane|Doe", "L1") == "P1::Jane|Doe::L1"

    def test_empty_delimiter_is_rejected(self):
        with pytest.raises(ValueError):
            PayloadEncoder(delimiter="")


class TestRenderRequest:
    """Tests for PayloadEncoder.render_request."""

    def test_builds_escaped_url_with_fixed_size(self, encoder):
        request = encoder.render_request("P1|Jane Doe|L1")
        assert request.url == "https://api.qrserver.com/v1/create-qr-code/?data=P1%7CJane+Doe%7CL1&size=150x150"
        assert request.size == "150x150"
        assert request.data == "P1|Jane Doe|L1"

    def test_url_round_trips_payload(self, encoder):
        payload = "P1|Zoë & Co?|L1"
        query = parse_qs(urlparse(encoder.render_request(payload).url).query)
        assert query["data"] == [payload]

    def test_uses_configured_service(self):
        encoder = PayloadEncoder(render_base_url="https://codes.example.test/render", render_size="300x300")
        request = encoder.render_request("P1|Jane Doe|L1")
        assert request.url.startswith("https://codes.example.test/render?data=")
        assert request.url.endswith("&size=300x300")
        assert str(request) == request.url
