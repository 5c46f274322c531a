"""Terminal frontend for duview, built on textual."""
