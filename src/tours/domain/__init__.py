from .models import Direction, Step, Tour, new_id  # noqa: F401

__all__ = ["Direction", "Step", "Tour", "new_id"]
