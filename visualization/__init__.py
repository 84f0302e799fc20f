"""Charts for component specs."""
