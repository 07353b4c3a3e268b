"""Tests for the upstream API clients (with mocked transports)."""
import asyncio
from unittest.mock import patch

import httpx
import pytest

from alpha_agent.services.narrative_client import fetch_narratives
from alpha_agent.services.price_client import fetch_prices
from alpha_agent.services.tokens import BONK, JUP
from alpha_agent.trading.scorer import score


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def run_narratives(handler):
    async def go():
        async with mock_client(handler) as client:
            return await fetch_narratives(client)
    return asyncio.run(go())


def run_prices(handler, token_ids):
    async def go():
        async with mock_client(handler) as client:
            return await fetch_prices(token_ids, client)
    return asyncio.run(go())


class TestNarrativeClient:

    def test_basic(self):
        """Test radar narratives are parsed, extra fields kept."""
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/narratives"
            return httpx.Response(200, json={
                "narratives": [
                    {
                        "name": "DeFi",
                        "confidence": "HIGH",
                        "direction": "ACCELERATING",
                        "explanation": "TVL climbing",
                        "supporting_signals": ["tvl", "commits"],
                        "ideas": [{"name": "Vault", "description": "Auto-compounder", "complexity": "MEDIUM"}],
                        "score": 87,
                    }
                ]
            })

        result = run_narratives(handler)

        assert result.ok
        assert len(result.narratives) == 1
        narrative = result.narratives[0]
        assert narrative.name == "DeFi"
        assert narrative.supporting_signals == ["tvl", "commits"]
        assert narrative.ideas[0]["name"] == "Vault"
        assert narrative.model_dump()["score"] == 87

    def test_loose_ideas_do_not_drop_narrative(self):
        """Test odd build ideas never cost a narrative its opportunity."""
        def handler(request):
            return httpx.Response(200, json={"narratives": [
                {"name": "DeFi", "confidence": "HIGH", "direction": "ACCELERATING",
                 "ideas": [{"name": "Vault", "description": "d", "complexity": 3}, "Perps DEX", None]},
            ]})

        result = run_narratives(handler)

        assert [n.name for n in result.narratives] == ["DeFi"]
        assert result.narratives[0].ideas[1] == "Perps DEX"
        assert [o.action for o in score(result.narratives)] == ["ACCUMULATE"]

    def test_record_kept_verbatim(self):
        """Test nested unknown keys and absent fields round-trip untouched."""
        record = {"name": "DeFi", "confidence": "HIGH",
                  "ideas": [{"name": "Vault", "complexity": "LOW", "tags": ["t"]}]}

        result = run_narratives(lambda request: httpx.Response(200, json={"narratives": [record]}))

        assert result.narratives[0].to_record() == record

    def test_null_signals_treated_as_empty(self):
        def handler(request):
            return httpx.Response(200, json={"narratives": [
                {"name": "AI Agents", "confidence": "MEDIUM", "direction": "STABLE",
                 "explanation": None, "supporting_signals": None}
            ]})

        result = run_narratives(handler)

        assert result.narratives[0].supporting_signals == []
        assert result.narratives[0].explanation == ""

    def test_missing_narratives_key(self):
        result = run_narratives(lambda request: httpx.Response(200, json={"status": "warming up"}))

        assert result.ok
        assert result.narratives == []

    def test_server_error(self):
        """Test non-2xx degrades to empty with a reason."""
        result = run_narratives(lambda request: httpx.Response(503))

        assert not result.ok
        assert result.narratives == []
        assert "503" in result.error

    def test_network_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = run_narratives(handler)

        assert not result.ok
        assert result.narratives == []

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        result = run_narratives(handler)

        assert result.narratives == []
        assert "unreachable" in result.error

    def test_invalid_json(self):
        result = run_narratives(lambda request: httpx.Response(200, text="<html>oops</html>"))

        assert result.narratives == []
        assert result.error == "Narrative radar sent invalid JSON"

    @pytest.mark.parametrize("payload", [[1, 2, 3], {"narratives": "DeFi"}, "narratives"])
    def test_unexpected_shape(self, payload):
        result = run_narratives(lambda request: httpx.Response(200, json=payload))

        assert result.narratives == []
        assert result.error == "Malformed narrative payload"

    def test_malformed_records_skipped(self):
        """Test one bad record doesn't sink the whole poll."""
        def handler(request):
            return httpx.Response(200, json={"narratives": [
                {"confidence": "HIGH"},
                "not a record",
                {"name": "Trading", "confidence": "MEDIUM", "direction": "ACCELERATING"},
            ]})

        result = run_narratives(handler)

        assert result.ok
        assert [n.name for n in result.narratives] == ["Trading"]

    def test_uses_configured_radar_url(self):
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(200, json={"narratives": []})

        with patch("alpha_agent.services.narrative_client.get_settings") as mock_settings:
            mock_settings.return_value.narrative_radar_url = "https://radar.example.com/"
            mock_settings.return_value.request_timeout = 5.0
            run_narratives(handler)

        assert seen == ["https://radar.example.com/api/narratives"]


class TestPriceClient:

    def test_v2_payload(self):
        """Test Jupiter v2 string prices are parsed to floats."""
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.params["ids"] == f"{JUP},{BONK}"
            return httpx.Response(200, json={"data": {
                JUP: {"id": JUP, "type": "derivedPrice", "price": "0.912"},
                BONK: {"id": BONK, "type": "derivedPrice", "price": "0.0000213"},
            }})

        result = run_prices(handler, [JUP, BONK])

        assert result.ok
        assert result.prices == {JUP: 0.912, BONK: 0.0000213}

    def test_v3_payload(self):
        result = run_prices(
            lambda request: httpx.Response(200, json={JUP: {"usdPrice": 0.9, "decimals": 6}}),
            [JUP],
        )

        assert result.get(JUP) == 0.9

    def test_partial_prices(self):
        """Test null, zero and missing prices come back as absent."""
        def handler(request):
            return httpx.Response(200, json={"data": {JUP: None, BONK: {"price": "0"}}})

        result = run_prices(handler, [JUP, BONK, "UnknownMint"])

        assert result.prices == {JUP: None, BONK: None}
        assert result.get("UnknownMint") is None

    def test_duplicate_ids_requested_once(self):
        def handler(request):
            assert request.url.params["ids"] == JUP
            return httpx.Response(200, json={"data": {JUP: {"price": 1}}})

        assert run_prices(handler, [JUP, JUP]).prices == {JUP: 1.0}

    def test_empty_set_skips_network(self):
        """Test an empty token set never hits the price API."""
        def handler(request):
            raise AssertionError("price API should not be called")

        result = run_prices(handler, set())

        assert result.ok
        assert result.prices == {}

    def test_empty_set_opens_no_client(self):
        with patch("alpha_agent.services.price_client.httpx.AsyncClient") as mock_client_cls:
            result = asyncio.run(fetch_prices([]))

        mock_client_cls.assert_not_called()
        assert result.prices == {}

    def test_server_error(self):
        result = run_prices(lambda request: httpx.Response(429), [JUP])

        assert result.prices == {}
        assert "429" in result.error

    def test_network_failure(self):
        def handler(request):
            raise httpx.ConnectError("dns failure", request=request)

        result = run_prices(handler, [JUP])

        assert result.prices == {}
        assert not result.ok

    def test_invalid_json(self):
        result = run_prices(lambda request: httpx.Response(200, text="not json"), [JUP])

        assert result.prices == {}
        assert result.error == "Price API sent invalid JSON"
