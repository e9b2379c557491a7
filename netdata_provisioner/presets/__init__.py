"""Static presets."""
