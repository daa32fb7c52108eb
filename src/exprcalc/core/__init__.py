"""Core pipeline: errors, configuration, IR, compiler and executor."""
