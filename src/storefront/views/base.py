"""Shared page plumbing and display helpers."""


def format_amount(amount: float) -> str:
    """Two-decimal money string, e.g. 12.5 → "12.50"."""
    return f"{amount:.2f}"


class Page:
    """A page view-model. Opened when its route becomes active, closed when it stops being active."""

    view_id: str = ""

    def open(self) -> None:
        pass

    def close(self) -> None:
        pass
