"""Command handlers, grouped by the phase that registers them."""
