class InvalidMove(ValueError):
    """Raised when a turn, placement or build breaks the rules of the game."""

    def __init__(self, reason: str = "invalid move") -> None:
        super().__init__(reason)
        self.reason = reason
