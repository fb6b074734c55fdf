# tests/fakes/test_fake_neo4j_manager.py
"""Validate FakeNeo4jManager behavior."""

import pytest

from tests.fakes.fake_neo4j_manager import FakeNeo4jManager


@pytest.fixture
def fake() -> FakeNeo4jManager:
    return FakeNeo4jManager()


class TestQueryRecording:
    async def test_records_executed_queries(self, fake: FakeNeo4jManager) -> None:
        await fake.execute("MATCH (n) RETURN n", {"limit": 10})
        assert len(fake.executed_queries) == 1
        query, params = fake.executed_queries[0]
        assert query == "MATCH (n) RETURN n"
        assert params == {"limit": 10}

    async def test_records_batch_statements(self, fake: FakeNeo4jManager) -> None:
        statements = [
            ("MERGE (n:Car {id: $id})", {"id": 1}),
            ("MERGE (n:Property {name: $name})", {"name": "Track"}),
        ]
        await fake.execute_cypher_batch(statements)
        assert len(fake.batch_statements) == 1
        assert len(fake.executed_queries) == 2

    async def test_transaction_callback_runs_on_recording_transaction(self, fake: FakeNeo4jManager) -> None:
        def work(tx, value):
            tx.run("CREATE (n:Car {id: $id})", {"id": value})
            return value * 2

        result = await fake.execute_in_transaction(work, 21)

        assert result == 42
        fake.assert_query_executed(r"CREATE \(n:Car")


class TestConfigurableResponses:
    async def test_returns_configured_response_for_matching_query(self, fake: FakeNeo4jManager) -> None:
        fake.configure_response(r"MATCH.*Car", [{"n": "first"}])
        result = await fake.execute("MATCH (n:Car) RETURN n")
        assert result == [{"n": "first"}]

    async def test_returns_empty_list_when_no_pattern_matches(self, fake: FakeNeo4jManager) -> None:
        fake.configure_response(r"Car", [{"n": "first"}])
        result = await fake.execute("MATCH (n:Property) RETURN n")
        assert result == []

    async def test_configured_error_is_raised(self, fake: FakeNeo4jManager) -> None:
        fake.configure_error(r"DELETE", RuntimeError("boom"))
        with pytest.raises(RuntimeError, match="boom"):
            await fake.execute("MATCH (n) DETACH DELETE n")


class TestAssertionHelpers:
    async def test_assert_query_executed_reports_missing_pattern(self, fake: FakeNeo4jManager) -> None:
        await fake.execute("MATCH (n) RETURN n")
        with pytest.raises(AssertionError, match="No executed query matched"):
            fake.assert_query_executed(r"MERGE")

    async def test_reset_clears_everything(self, fake: FakeNeo4jManager) -> None:
        fake.configure_response(r".*", [{"x": 1}])
        await fake.execute("MATCH (n) RETURN n")
        fake.reset()
        assert fake.executed_queries == []
        assert await fake.execute("MATCH (n) RETURN n") == []
