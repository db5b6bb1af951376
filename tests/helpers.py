from __future__ import annotations


class CallCounter:
    """Zero-argument callable that counts its invocations."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1


class CaptureSink:
    """Diagnostic sink that keeps every message it receives."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)
