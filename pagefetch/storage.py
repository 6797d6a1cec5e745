import logging
from pathlib import Path

import pandas as pd

from .settings import PROJECT_ROOT

logger = logging.getLogger(__name__)

RESULTS_DIR = PROJECT_ROOT / "results"


def resolve_results_dir(path: str | Path | None) -> Path:
    """Relative paths are taken from the project root."""
    if path is None:
        return RESULTS_DIR
    p = Path(path)
    return p if p.is_absolute() else PROJECT_ROOT / p


def save_df(df: pd.DataFrame, name: str, results_dir: Path | None = None, append: bool = False) -> Path | None:
    """
    Persist a DataFrame as CSV under results/<name>.csv.

    With append=True rows are added to an existing file (header written once).
    Returns the written path, or None when there was nothing to write.
    """
    if df.empty:
        return None

    out_dir = results_dir or RESULTS_DIR
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / f"{name}.csv"
    if append and out_path.exists():
        df.to_csv(out_path, mode="a", header=False, index=False)
    else:
        df.to_csv(out_path, index=False)
    logger.info("Saved %s", out_path)
    return out_path
