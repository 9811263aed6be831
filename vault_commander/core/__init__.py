"""Store access, configuration and edit-session logic (no terminal code)."""
