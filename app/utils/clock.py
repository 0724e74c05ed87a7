"""Clock dependency for date-relative views."""
from datetime import date


def get_today() -> date:
    """
    Dependency supplying the evaluation date.

    Tests override this through app.dependency_overrides to pin "today".
    """
    return date.today()
