"""Static configuration shared across the application."""
