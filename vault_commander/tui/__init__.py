"""Full-screen browser built on Textual."""
