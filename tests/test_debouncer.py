# tests/test_debouncer.py
import asyncio
import unittest

from keyword_typeahead.core.debouncer import DebouncedLookup, LookupResult

DELAY_MS = 20
SETTLE = 0.08  # comfortably past DELAY_MS


class DebouncedLookupTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.deb = DebouncedLookup()
        self.calls = []
        self.settled = []

    def _perform(self, key, fail=False):
        async def run():
            self.calls.append(key)
            if fail:
                raise ConnectionError("boom")
            return [key]
        return run

    async def test_burst_collapses_to_last_call(self):
        for key in ["a", "al", "ali", "alic", "alice"]:
            self.deb.schedule(key, self._perform(key), self.settled.append, DELAY_MS)
        self.assertTrue(self.deb.pending)
        self.assertEqual(self.deb.pending_key, "alice")

        await asyncio.sleep(SETTLE)
        self.assertEqual(self.calls, ["alice"])
        self.assertEqual(len(self.settled), 1)
        self.assertTrue(self.settled[0].ok)
        self.assertEqual(self.settled[0].value, ["alice"])
        self.assertFalse(self.deb.pending)

    async def test_nothing_fires_before_delay(self):
        self.deb.schedule("a", self._perform("a"), self.settled.append, 200)
        await asyncio.sleep(0.02)
        self.assertEqual(self.calls, [])
        self.deb.cancel()

    async def test_cancel_disarms_without_callback(self):
        self.deb.schedule("a", self._perform("a"), self.settled.append, DELAY_MS)
        self.deb.cancel()
        await asyncio.sleep(SETTLE)
        self.assertEqual(self.calls, [])
        self.assertEqual(self.settled, [])
        self.assertIsNone(self.deb.pending_key)

    async def test_failure_is_reported_once_and_not_retried(self):
        self.deb.schedule("x", self._perform("x", fail=True), self.settled.append, DELAY_MS)
        await asyncio.sleep(SETTLE)
        self.assertEqual(self.calls, ["x"])
        self.assertEqual(len(self.settled), 1)
        self.assertFalse(self.settled[0].ok)
        self.assertIsInstance(self.settled[0].error, ConnectionError)

    async def test_separate_bursts_each_fire(self):
        self.deb.schedule("a", self._perform("a"), self.settled.append, DELAY_MS)
        await asyncio.sleep(SETTLE)
        self.deb.schedule("b", self._perform("b"), self.settled.append, DELAY_MS)
        await asyncio.sleep(SETTLE)
        self.assertEqual(self.calls, ["a", "b"])

    async def test_close_abandons_inflight(self):
        gate = asyncio.Event()

        async def slow():
            await gate.wait()
            return ["late"]

        self.deb.schedule("s", slow, self.settled.append, 1)
        await asyncio.sleep(0.03)
        self.assertEqual(self.deb.inflight, 1)
        self.deb.close()
        gate.set()
        await asyncio.sleep(0.02)
        self.assertEqual(self.settled, [])

    async def test_callback_error_is_logged(self):
        def explode(result):
            raise RuntimeError("render failed")

        with self.assertLogs("keyword_typeahead.core.debouncer", "ERROR") as logs:
            self.deb.schedule("a", self._perform("a"), explode, DELAY_MS)
            await asyncio.sleep(SETTLE)
        self.assertIn("lookup callback failed", logs.output[0])
        self.assertEqual(self.deb.inflight, 0)

        # the next burst still runs
        self.deb.schedule("b", self._perform("b"), self.settled.append, DELAY_MS)
        await asyncio.sleep(SETTLE)
        self.assertEqual(self.calls, ["a", "b"])


class LookupResultTests(unittest.TestCase):
    def test_constructors(self):
        self.assertTrue(LookupResult.success([1]).ok)
        err = LookupResult.failure(ValueError("x"))
        self.assertFalse(err.ok)
        self.assertIsNone(err.value)


if __name__ == "__main__":
    unittest.main()
