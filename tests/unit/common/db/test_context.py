import asyncio

from common.db.context import (
    get_current_session,
    set_current_session,
    reset_current_session,
    in_transaction,
    transactional,
)


class TestContextVariables:
    """Test context variable behavior."""

    def test_default_state(self):
        """No session is published outside a transaction."""
        assert get_current_session() is None
        assert in_transaction() is False

    def test_set_and_reset(self, test_db):
        token = set_current_session(test_db)
        assert get_current_session() is test_db
        assert in_transaction() is True

        reset_current_session(token)
        assert get_current_session() is None


class TestContextIsolation:
    """Test that context variables are isolated between concurrent async tasks."""

    async def test_concurrent_tasks_have_isolated_contexts(self, test_db):
        """Test that concurrent async tasks don't share context."""
        results = {}

        async def task_with_session(task_id: str, delay: float):
            token = set_current_session(test_db)
            await asyncio.sleep(delay)
            results[task_id] = get_current_session() is test_db
            reset_current_session(token)

        async def task_without_session(task_id: str):
            await asyncio.sleep(0.005)
            results[task_id] = get_current_session() is None

        await asyncio.gather(
            task_with_session("with", 0.01),
            task_without_session("without"),
        )

        assert results == {"with": True, "without": True}


class TestTransactionalDecorator:
    async def test_runs_inside_transaction(self):
        @transactional
        async def work():
            return in_transaction()

        assert await work() is True
        assert in_transaction() is False
