from pathway.crud.habits import get_active_habits, seed_habits_if_empty

__all__ = ["get_active_habits", "seed_habits_if_empty"]
