"""Store API: users and products over MongoDB."""
