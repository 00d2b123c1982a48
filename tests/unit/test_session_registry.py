import asyncio
from unittest.mock import AsyncMock, MagicMock

from legallyclear.analysis.models import AnalysisResult
from legallyclear.ingestion.models import UploadedDocument
from legallyclear.session.controller import SessionController
from legallyclear.session.models import SessionStatus
from legallyclear.session.registry import SessionRegistry


def _factory(session_id: str) -> SessionController:
    return SessionController(
        session_id=session_id,
        analyzer=AsyncMock(),
        negotiator=AsyncMock(),
        min_scan_seconds=0,
    )


class TestGetOrCreate:
    def test_unknown_id_creates_new_session(self) -> None:
        async def scenario() -> None:
            registry = SessionRegistry(_factory)
            controller = await registry.get_or_create("missing")
            assert controller.session_id != "missing"
            assert len(controller.session_id) == 32
            assert len(registry) == 1

        asyncio.run(scenario())

    def test_none_creates_new_session(self) -> None:
        async def scenario() -> None:
            registry = SessionRegistry(_factory)
            first = await registry.get_or_create(None)
            second = await registry.get_or_create(None)
            assert first is not second
            assert len(registry) == 2

        asyncio.run(scenario())

    def test_known_id_returns_same_controller(self) -> None:
        async def scenario() -> None:
            registry = SessionRegistry(_factory)
            created = await registry.get_or_create(None)
            again = await registry.get_or_create(created.session_id)
            assert again is created
            assert len(registry) == 1

        asyncio.run(scenario())

    def test_evicts_least_recently_used(self) -> None:
        async def scenario() -> None:
            registry = SessionRegistry(_factory, max_sessions=2)
            first = await registry.get_or_create(None)
            second = await registry.get_or_create(None)
            await registry.get_or_create(first.session_id)
            await registry.get_or_create(None)
            assert len(registry) == 2
            assert await registry.get_or_create(first.session_id) is first
            replaced = await registry.get_or_create(second.session_id)
            assert replaced is not second

        asyncio.run(scenario())


class TestClose:
    def test_cancels_pending_and_clears(self) -> None:
        async def scenario() -> None:
            controller = MagicMock(spec=SessionController)
            registry = SessionRegistry(lambda _sid: controller)
            await registry.get_or_create(None)
            await registry.close()
            controller.cancel_pending.assert_called_once_with()
            controller.drain.assert_awaited_once_with()
            assert len(registry) == 0

        asyncio.run(scenario())


class TestEvictionCancelsAnalysis:
    def test_evicted_scanning_session_is_cancelled(self, document: UploadedDocument) -> None:
        async def scenario() -> None:
            started = asyncio.Event()
            cancelled = asyncio.Event()

            async def hang(_doc: UploadedDocument) -> AnalysisResult:
                started.set()
                try:
                    await asyncio.sleep(10)
                except asyncio.CancelledError:
                    cancelled.set()
                    raise
                return AnalysisResult(summary="never")

            analyzer = AsyncMock()
            analyzer.analyze.side_effect = hang

            def factory(session_id: str) -> SessionController:
                return SessionController(
                    session_id=session_id,
                    analyzer=analyzer,
                    negotiator=AsyncMock(),
                    min_scan_seconds=0,
                )

            registry = SessionRegistry(factory, max_sessions=1)
            evicted = await registry.get_or_create(None)
            await evicted.submit(document)
            await started.wait()

            await registry.get_or_create(None)
            await evicted.drain()

            assert cancelled.is_set()
            assert evicted.snapshot().status is SessionStatus.SCANNING
            await registry.close()

        asyncio.run(scenario())
