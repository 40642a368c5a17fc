"""Account flows."""
