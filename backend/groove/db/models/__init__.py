"""ORM models exposed for metadata discovery."""
from groove.db.models.habit import Habit
from groove.db.models.habit_completion import HabitCompletion
from groove.db.models.user import User

__all__ = [
    "Habit",
    "HabitCompletion",
    "User",
]
