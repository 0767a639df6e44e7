"""Drive an asyncio event loop from the Qt event loop.

Qt owns the main thread, so the asyncio loop is never run forever. A
QTimer instead runs one loop iteration per tick: callbacks that are ready
(decode completions handed back from the executor, task steps) execute on
the GUI thread between Qt events.
"""

import asyncio
import logging

from PyQt5.QtCore import QObject, QTimer

from constants import ASYNC_PUMP_INTERVAL_MS


class AsyncioPump(QObject):
    """Runs ready asyncio callbacks on every timer tick"""

    def __init__(self, loop=None, interval_ms=ASYNC_PUMP_INTERVAL_MS, parent=None):
        super().__init__(parent)
        self._logger = logging.getLogger('AsyncioPump')
        self.loop = loop or asyncio.new_event_loop()
        asyncio.set_event_loop(self.loop)
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self.run_once)

    def start(self):
        self._timer.start()

    def stop(self):
        self._timer.stop()

    def run_once(self):
        """One iteration of the asyncio loop"""
        if self.loop.is_closed() or self.loop.is_running():
            return
        self.loop.call_soon(self.loop.stop)
        self.loop.run_forever()

    def close(self):
        """Stop pumping, cancel leftover tasks and close the loop"""
        self.stop()
        if self.loop.is_closed():
            return
        pending = asyncio.all_tasks(self.loop)
        for task in pending:
            task.cancel()
        if pending:
            self.loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
        self.loop.close()
        self._logger.debug(f"Closed asyncio loop ({len(pending)} tasks cancelled)")
