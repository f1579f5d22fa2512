"""
Gemeinsame Fixtures für die DDD Parser Tests
"""

import struct

import pytest
from fastapi.testclient import TestClient

from dddparser.adapters.base import BaseDecoderAdapter
from dddparser.errors import DecoderError
from dddparser.service import ParserService, get_parser_service
from server import app


class FakeDecoderAdapter(BaseDecoderAdapter):
    """Test-Decoder mit festen Ergebnissen und Aufrufzählern"""

    name = "fake"

    def __init__(
        self,
        card_record=None,
        vu_record=None,
        card_verified=True,
        vu_verified=True,
        card_error="card: invalid TLV",
        vu_error="vu: invalid TV",
    ):
        self.card_record = card_record
        self.vu_record = vu_record
        self.card_verified = card_verified
        self.vu_verified = vu_verified
        self.card_error = card_error
        self.vu_error = vu_error
        self.card_calls = []
        self.vu_calls = []

    def decode_card(self, data):
        self.card_calls.append(data)
        if self.card_record is None:
            raise DecoderError(self.card_error)
        return self.card_verified, self.card_record

    def decode_vu(self, data):
        self.vu_calls.append(data)
        if self.vu_record is None:
            raise DecoderError(self.vu_error)
        return self.vu_verified, self.vu_record


def tlv(tag: int, block_type: int, payload: bytes) -> bytes:
    """Einen TLV-Block einer Kartendatei bauen"""
    return struct.pack(">HBH", tag, block_type, len(payload)) + payload


@pytest.fixture
def card_bytes():
    """Minimale Gen1-Fahrerkarte: EF_ICC, EF_IC, EF_Identification + Signatur"""
    return (
        tlv(0x0002, 0x00, bytes(range(25)))
        + tlv(0x0005, 0x00, b"\x11" * 8)
        + tlv(0x0520, 0x00, b"DRIVER" + b"\x00" * 20)
        + tlv(0x0520, 0x01, b"\xAA" * 128)
    )


@pytest.fixture
def vu_bytes():
    """Minimaler Gen1-VU-Download: Überblick (TREP 0x01)"""
    return b"\x76\x01" + bytes(range(64))


@pytest.fixture
def client():
    """TestClient mit Standard-Decoder (Framing)"""
    app.dependency_overrides[get_parser_service] = lambda: ParserService()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def fake_client():
    """Factory: TestClient mit FakeDecoderAdapter"""
    def _make(adapter: FakeDecoderAdapter) -> TestClient:
        service = ParserService(adapter)
        app.dependency_overrides[get_parser_service] = lambda: service
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
