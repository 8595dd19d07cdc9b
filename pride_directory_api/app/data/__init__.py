"""Static reference data shipped with the application."""
