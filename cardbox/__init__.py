"""cardbox: a cards API for tasks, notes and goals (see cardbox.backend)."""
