"""runt: parallel runner for batches of test executables."""

__version__ = "0.1.0"
