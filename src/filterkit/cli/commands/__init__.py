"""Top-level FilterKit commands (auto-discovered)."""
