"""Minimal signal/slot hook for Qt-free model code.

Mirrors the connect/emit shape of pyqtSignal so the host can forward
model notifications into its own event system.
"""


class EventHook:
    """List of callbacks invoked in connection order on emit()"""

    def __init__(self, name: str = 'event'):
        self._name = name
        self._handlers = []

    def connect(self, handler):
        """Register a callback. Returns a callable that disconnects it."""
        self._handlers.append(handler)
        return lambda: self.disconnect(handler)

    def disconnect(self, handler):
        if handler in self._handlers:
            self._handlers.remove(handler)

    def emit(self, *args, **kwargs):
        # Copy so handlers may disconnect themselves while being called
        for handler in list(self._handlers):
            handler(*args, **kwargs)

    def __len__(self):
        return len(self._handlers)

    def __repr__(self):
        return f"EventHook({self._name}, {len(self._handlers)} handlers)"
