"""In-memory Notifier that records messages for assertions."""


class FakeNotifier:
    def __init__(self):
        self.messages: list[tuple[str, str]] = []

    def notify(self, kind: str, message: str) -> None:
        self.messages.append((kind, message))

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.messages]
