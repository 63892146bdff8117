"""Studio photo generation for uploaded garments."""
