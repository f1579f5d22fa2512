"""
Parser Service Tests - Adapter-Registry, Singleton und Server-Konfiguration
"""

import logging

import pytest

import server
from dddparser import service as service_module
from dddparser.adapters.framing_adapter import FramingAdapter
from dddparser.service import ParserService, get_parser_service

from conftest import FakeDecoderAdapter


class TestAdapterRegistry:
    """Tests für ParserService.from_name"""

    def test_known_name(self, caplog):
        with caplog.at_level(logging.INFO, logger="dddparser.service"):
            service = ParserService.from_name("Framing")

        assert isinstance(service.adapter, FramingAdapter)
        assert "Using decoder adapter 'framing'" in caplog.text

    def test_unknown_name_falls_back_to_framing(self, caplog):
        """Unbekannter Decoder: Warnung und Standard-Decoder"""
        with caplog.at_level(logging.WARNING, logger="dddparser.service"):
            service = ParserService.from_name("asn1-full")

        assert isinstance(service.adapter, FramingAdapter)
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "asn1-full" in warnings[0].getMessage()


class TestGlobalService:
    """Tests für get_parser_service"""

    @pytest.fixture(autouse=True)
    def reset_singleton(self, monkeypatch):
        monkeypatch.setattr(service_module, "_service_instance", None)
        monkeypatch.setitem(ParserService.ADAPTERS, "fake", FakeDecoderAdapter)

    def test_honors_ddd_decoder(self, monkeypatch):
        monkeypatch.setenv("DDD_DECODER", "fake")

        service = get_parser_service()

        assert isinstance(service.adapter, FakeDecoderAdapter)
        assert get_parser_service() is service, "Service should be created once"

    def test_defaults_to_framing(self, monkeypatch):
        monkeypatch.delenv("DDD_DECODER", raising=False)

        assert isinstance(get_parser_service().adapter, FramingAdapter)


class TestServerStartup:
    """Port wird erst beim Start ausgewertet"""

    @pytest.fixture
    def uvicorn_calls(self, monkeypatch):
        import uvicorn

        calls = []
        monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))
        return calls

    def test_port_from_environment(self, monkeypatch, uvicorn_calls):
        monkeypatch.setattr(server, "PORT", "9090")

        server.main(port=None, addr="")

        assert uvicorn_calls[0]["port"] == 9090
        assert uvicorn_calls[0]["host"] == "0.0.0.0"

    def test_cli_port_overrides_environment(self, monkeypatch, uvicorn_calls):
        monkeypatch.setattr(server, "PORT", "not-a-port")

        server.main(port=8181, addr="127.0.0.1")

        assert uvicorn_calls[0] == {"host": "127.0.0.1", "port": 8181, "log_level": server.LOG_LEVEL.lower()}
