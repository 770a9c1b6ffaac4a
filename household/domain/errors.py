"""Error taxonomy of the household core.

ValidationError: malformed input rejected before any state is mutated.
NotFoundError: a referenced chore id does not resolve in the chore store.
"""


class ValidationError(ValueError):
    pass


class NotFoundError(LookupError):
    def __init__(self, chore_id, message: str = ""):
        self.chore_id = chore_id
        super().__init__(message or f"Chore '{chore_id}' not found")
