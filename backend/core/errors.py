"""
Failure taxonomy shared by the retrieval boundary and the refresh loop.
"""


class SourceUnavailable(Exception):
    """The data source could not deliver rows for one team."""

    def __init__(self, team: str, reason: str):
        super().__init__(f"team {team!r}: {reason}")
        self.team = team
        self.reason = reason


class MalformedRow(SourceUnavailable):
    """A row's date or numeric fields failed to parse; the whole team is skipped."""

    def __init__(self, team: str, index: int, reason: str):
        super().__init__(team, f"row {index}: {reason}")
        self.index = index


class InitializationFailure(Exception):
    """Credential or source setup failed at process start."""
