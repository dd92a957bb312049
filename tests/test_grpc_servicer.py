"""Tests for the gRPC servicer, served in-process on an ephemeral port."""

import argparse
import asyncio
from unittest.mock import AsyncMock

import grpc
import pytest
import pytest_asyncio

from currency_converter import contracts
from currency_converter import server as server_module
from currency_converter.client import CurrencyConverterClient, run
from currency_converter.converter import Converter
from currency_converter.database import Database
from currency_converter.errors import BackingStoreUnavailable
from currency_converter.rates import DatabaseRateTable
from currency_converter.server import create_server, serve
from currency_converter.service import ConversionService
from currency_converter.settings import Settings


@pytest_asyncio.fixture
async def start_server():
    """Start servers for a ConversionService; yields a factory returning the bound address."""
    servers = []

    async def _start(service):
        server = create_server(service, max_workers=2)
        port = server.add_insecure_port("localhost:0")
        await server.start()
        servers.append(server)
        return f"localhost:{port}"

    yield _start

    for server in servers:
        await server.stop(grace=None)


@pytest_asyncio.fixture
async def stub(start_server, service):
    address = await start_server(service)
    async with grpc.aio.insecure_channel(address) as channel:
        yield contracts.CurrencyConverterStub(channel)


class TestConvertRpc:
    """Tests for successful Convert calls."""

    @pytest.mark.asyncio
    async def test_usd_to_inr(self, stub):
        response = await stub.Convert(
            contracts.ConvertRequest(amount=100, source_currency="USD", target_currency="INR"),
            timeout=1.0,
        )
        assert response.converted_amount == 8408.0

    @pytest.mark.asyncio
    async def test_eur_to_usd(self, stub):
        response = await stub.Convert(
            contracts.ConvertRequest(amount=100, source_currency="EUR", target_currency="USD"),
            timeout=1.0,
        )
        assert response.converted_amount == pytest.approx(108.8368, rel=1e-6)

    @pytest.mark.asyncio
    async def test_omitted_fields_use_base_currency(self, stub):
        response = await stub.Convert(contracts.ConvertRequest(amount=55.5), timeout=1.0)
        assert response.converted_amount == 55.5

    @pytest.mark.asyncio
    async def test_no_deadline(self, stub):
        response = await stub.Convert(
            contracts.ConvertRequest(amount=-100, source_currency="USD", target_currency="INR")
        )
        assert response.converted_amount == -8408.0

    @pytest.mark.asyncio
    async def test_concurrent_calls(self, stub):
        requests = [
            contracts.ConvertRequest(amount=float(i), source_currency=src, target_currency=dst)
            for i in range(1, 21)
            for src, dst in (("USD", "INR"), ("INR", "EUR"), ("EUR", "USD"))
        ]

        responses = await asyncio.gather(*(stub.Convert(r, timeout=5.0) for r in requests))

        rates = {"INR": 1.0, "USD": 84.08, "EUR": 91.51}
        for request, response in zip(requests, responses):
            expected = request.amount * rates[request.source_currency] / rates[request.target_currency]
            assert response.converted_amount == expected


class TestConvertRpcErrors:
    """Tests for error status codes."""

    @pytest.mark.asyncio
    async def test_unknown_currency_is_not_found(self, stub):
        with pytest.raises(grpc.aio.AioRpcError) as exc_info:
            await stub.Convert(
                contracts.ConvertRequest(amount=100, source_currency="ABC", target_currency="XYZ"),
                timeout=1.0,
            )
        assert exc_info.value.code() == grpc.StatusCode.NOT_FOUND
        assert "ABC" in exc_info.value.details()
        assert "XYZ" in exc_info.value.details()

    @pytest.mark.asyncio
    async def test_store_failure_is_unavailable(self, start_server):
        table = AsyncMock()
        table.base_currency = "INR"
        table.lookup.side_effect = BackingStoreUnavailable("rate store unavailable")
        address = await start_server(ConversionService(Converter(table)))

        async with grpc.aio.insecure_channel(address) as channel:
            stub = contracts.CurrencyConverterStub(channel)
            with pytest.raises(grpc.aio.AioRpcError) as exc_info:
                await stub.Convert(contracts.ConvertRequest(amount=1, source_currency="USD"), timeout=1.0)

        assert exc_info.value.code() == grpc.StatusCode.UNAVAILABLE

    @pytest.mark.asyncio
    async def test_slow_lookup_is_deadline_exceeded(self, start_server):
        async def slow_lookup(code):
            await asyncio.sleep(1.0)
            return 1.0

        table = AsyncMock()
        table.base_currency = "INR"
        table.lookup.side_effect = slow_lookup
        address = await start_server(ConversionService(Converter(table)))

        async with grpc.aio.insecure_channel(address) as channel:
            stub = contracts.CurrencyConverterStub(channel)
            with pytest.raises(grpc.aio.AioRpcError) as exc_info:
                await stub.Convert(contracts.ConvertRequest(amount=1), timeout=0.2)

        assert exc_info.value.code() == grpc.StatusCode.DEADLINE_EXCEEDED

    @pytest.mark.asyncio
    async def test_server_default_deadline(self, start_server):
        async def slow_lookup(code):
            await asyncio.sleep(1.0)
            return 1.0

        table = AsyncMock()
        table.base_currency = "INR"
        table.lookup.side_effect = slow_lookup
        address = await start_server(ConversionService(Converter(table), default_timeout=0.1))

        async with grpc.aio.insecure_channel(address) as channel:
            stub = contracts.CurrencyConverterStub(channel)
            with pytest.raises(grpc.aio.AioRpcError) as exc_info:
                await stub.Convert(contracts.ConvertRequest(amount=1))

        assert exc_info.value.code() == grpc.StatusCode.DEADLINE_EXCEEDED


class TestDatabaseBackedRpc:
    """Convert over the database-backed rate table."""

    @pytest.mark.asyncio
    async def test_convert_with_database_rates(self, start_server, db_rate_table):
        address = await start_server(ConversionService(Converter(db_rate_table)))

        async with CurrencyConverterClient(address) as client:
            assert await client.convert(100, "USD", "INR") == 8408.0

    @pytest.mark.asyncio
    async def test_closed_database_is_unavailable(self, start_server, seeded_db):
        table = DatabaseRateTable(seeded_db, base_currency="INR")
        address = await start_server(ConversionService(Converter(table)))
        await seeded_db.close()

        async with CurrencyConverterClient(address) as client:
            with pytest.raises(grpc.aio.AioRpcError) as exc_info:
                await client.convert(100, "USD", "INR")

        assert exc_info.value.code() == grpc.StatusCode.UNAVAILABLE


class TestClientCli:
    """Tests for the command-line client."""

    @pytest.mark.asyncio
    async def test_run_success(self, start_server, service):
        address = await start_server(service)
        args = argparse.Namespace(address=address, amount=100.0, source="USD", target="INR", timeout=1.0)

        assert await run(args) == 0

    @pytest.mark.asyncio
    async def test_run_unknown_currency(self, start_server, service):
        address = await start_server(service)
        args = argparse.Namespace(address=address, amount=100.0, source="ABC", target="XYZ", timeout=1.0)

        assert await run(args) == 1


class TestServe:
    """Tests for the server entry point."""

    @pytest.mark.asyncio
    async def test_database_closed_when_startup_fails(self, tmp_path, monkeypatch):
        db_path = tmp_path / "rates.db"

        def failing_create_server(service, max_workers=10):
            raise RuntimeError("bind failed")

        monkeypatch.setattr(server_module, "create_server", failing_create_server)

        try:
            with pytest.raises(RuntimeError, match="bind failed"):
                await serve(Settings(_env_file=None, rate_source="database", database_path=db_path))

            with pytest.raises(RuntimeError):
                _ = Database(str(db_path)).conn
        finally:
            Database(str(db_path)).remove_from_cache()
