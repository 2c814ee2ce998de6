"""Navigation model, validation and derived indices."""
