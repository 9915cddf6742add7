from datetime import UTC, datetime


def utc_now() -> datetime:
    """Default clock for the workflow and quota tracker."""
    return datetime.now(UTC)
