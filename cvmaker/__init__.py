"""Step-by-step CV builder with PDF export."""
