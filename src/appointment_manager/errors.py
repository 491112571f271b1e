"""Exception hierarchy shared by the repository, auth and API layers."""


class AppointmentManagerError(Exception):
    """Base class for every error raised by this package."""


class DataAccessError(AppointmentManagerError):
    """A store operation could not be executed.

    Covers connectivity loss, malformed statements and constraint
    violations.  The originating SQLAlchemy exception is chained as
    ``__cause__``.
    """


class EmptyTableError(DataAccessError):
    """``next_id`` found no rows to compute a maximum from."""

    def __init__(self, table: str) -> None:
        super().__init__(f"Unable to fetch maximum id from empty table {table!r}")
        self.table = table


class IntegrityViolationError(DataAccessError):
    """The store rejected a write for breaking a constraint.

    Duplicate keys, dangling references and failed check constraints.
    """


class SinkWriteError(AppointmentManagerError):
    """An audit record could not be appended."""
