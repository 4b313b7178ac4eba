"""
Tests for the debounced scheduler.
"""

import asyncio

from toolboard.catalog.debounce import Debouncer


class TestDebouncer:
    """Coalescing of rapid schedule() calls."""

    def test_rapid_typing_fires_once_with_latest_value(self):
        """Five keystrokes 10ms apart produce one filter cycle."""
        fired = []
        current = {"query": ""}

        async def scenario():
            debouncer = Debouncer(0.05, lambda: fired.append(current["query"]))
            for text in ["j", "js", "jso", "json", "json "]:
                current["query"] = text
                debouncer.schedule()
                await asyncio.sleep(0.01)
            assert debouncer.pending
            await asyncio.sleep(0.15)
            assert not debouncer.pending

        asyncio.run(scenario())
        assert fired == ["json "]

    def test_separate_bursts_fire_separately(self):
        fired = []

        async def scenario():
            debouncer = Debouncer(0.02, lambda: fired.append(len(fired)))
            debouncer.schedule()
            await asyncio.sleep(0.1)
            debouncer.schedule()
            debouncer.schedule()
            await asyncio.sleep(0.1)

        asyncio.run(scenario())
        assert fired == [0, 1]

    def test_cancel_drops_pending_fire(self):
        fired = []

        async def scenario():
            debouncer = Debouncer(0.02, lambda: fired.append(1))
            debouncer.schedule()
            debouncer.cancel()
            assert not debouncer.pending
            await asyncio.sleep(0.08)

        asyncio.run(scenario())
        assert fired == []

    def test_coroutine_callback_runs_as_task(self):
        fired = []

        async def callback():
            fired.append("ran")

        async def scenario():
            debouncer = Debouncer(0.01, callback)
            debouncer.schedule()
            await asyncio.sleep(0.05)
            await debouncer.flush()

        asyncio.run(scenario())
        assert fired == ["ran"]

    def test_slow_replies_do_not_overlap(self):
        """A second fire waits for the first coroutine to finish."""
        events = []
        counter = {"n": 0}

        async def send():
            counter["n"] += 1
            n = counter["n"]
            events.append(("start", n))
            await asyncio.sleep(0.05 if n == 1 else 0)
            events.append(("end", n))

        async def scenario():
            debouncer = Debouncer(0.0, send)
            debouncer.schedule()
            await asyncio.sleep(0.01)
            debouncer.schedule()
            await asyncio.sleep(0.01)
            await debouncer.flush()

        asyncio.run(scenario())
        assert events == [("start", 1), ("end", 1), ("start", 2), ("end", 2)]

    def test_failed_fire_does_not_block_the_next(self):
        fired = []

        async def callback():
            fired.append(len(fired))
            if len(fired) == 1:
                raise RuntimeError("send failed")

        async def scenario():
            debouncer = Debouncer(0.0, callback)
            debouncer.schedule()
            await asyncio.sleep(0.01)
            debouncer.schedule()
            await asyncio.sleep(0.01)
            await debouncer.flush()

        asyncio.run(scenario())
        assert fired == [0, 1]

    def test_close_cancels_running_callback(self):
        finished = []

        async def callback():
            await asyncio.sleep(0.2)
            finished.append(True)

        async def scenario():
            debouncer = Debouncer(0.0, callback)
            debouncer.schedule()
            await asyncio.sleep(0.01)
            debouncer.close()
            assert not debouncer.pending
            await asyncio.sleep(0.3)

        asyncio.run(scenario())
        assert finished == []
