"""
Change callback recorder for notifier tests.
"""


class CallRecorder:
    """Zero-argument callback that counts how often it was called."""

    def __init__(self, on_call=None):
        self.calls = 0
        self._on_call = on_call

    def __call__(self) -> None:
        self.calls += 1
        if self._on_call is not None:
            self._on_call()
