"""Custom exceptions for the DropIndex integration."""


class DropIndexError(Exception):
    """Base class for exceptions raised by the DropIndex integration."""

    pass


class CatalogError(DropIndexError):
    """Raised when the fixture catalog configuration is malformed."""

    pass


class InvalidFixtureError(DropIndexError):
    """Raised when a session is started without a resolvable fixture."""

    def __init__(self, fixture_id: str | None, message: str | None = None) -> None:
        """Initialize with the fixture id that failed to resolve."""
        self.fixture_id = fixture_id
        super().__init__(
            message
            or (
                f"Unknown fixture: {fixture_id}"
                if fixture_id
                else "No fixture selected"
            )
        )


class FixtureChangeError(InvalidFixtureError):
    """Raised when a different fixture is requested for a session in progress."""

    def __init__(self, fixture_id: str, active_fixture_id: str) -> None:
        """Initialize with the requested and the active fixture ids."""
        self.active_fixture_id = active_fixture_id
        super().__init__(
            fixture_id,
            f"Cannot switch to {fixture_id} while a {active_fixture_id} session is in progress",
        )
