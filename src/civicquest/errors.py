class QuestError(Exception):
    """Base class for errors raised by civicquest."""


class NotFoundError(QuestError):
    """A quiz or game record id is absent from storage."""

    def __init__(self, kind: str, item_id: int):
        self.kind = kind
        self.item_id = item_id
        super().__init__(f"{kind} not found")


class UserInputRejected(QuestError):
    """A player action that leaves the session unchanged."""

    def __init__(self, title: str, description: str = ""):
        self.title = title
        self.description = description
        super().__init__(title)
