"""Orbital mechanics, the simulated clock and scale-level state."""
