"""Small helpers shared across bldt layers."""
