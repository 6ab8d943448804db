from .core import run_duel, run_batch, WORDLE_MAX_TURNS
from .io import write_csv, write_manifest

__all__ = ["run_duel", "run_batch", "WORDLE_MAX_TURNS", "write_csv", "write_manifest"]
