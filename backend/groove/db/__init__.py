"""Database utilities and models."""

from groove.db.base import Base
from groove.db import models  # noqa: F401  (imported for side effects)

__all__ = ["Base"]
