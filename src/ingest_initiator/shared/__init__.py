"""Types and schemas shared across layers."""
