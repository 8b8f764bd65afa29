from __future__ import annotations
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict

from . import canon
from .exceptions import ConfigError, require


class AppConfig(BaseModel):
    """Run settings handed from the command line to the aggregator."""

    model_config = ConfigDict(frozen=True)

    data_dir: Path = Path(canon.DEFAULT_DATA_DIR)
    force: bool = False
    verbose: bool = False
    output_dir: Optional[Path] = None

    @property
    def dashboard_dir(self) -> Path:
        """Where dashboard-data.json goes: output_dir, else <data_dir>/../output."""
        if self.output_dir is not None:
            return self.output_dir
        return self.data_dir.resolve().parent / "output"


def load_config(
    data_dir: Path | str = canon.DEFAULT_DATA_DIR,
    *,
    force: bool = False,
    verbose: bool = False,
    output_dir: Optional[Path | str] = None,
) -> AppConfig:
    """Build an AppConfig, rejecting a data directory that is missing or not a directory."""
    path = Path(data_dir)
    require(path.exists(), f"Data directory does not exist: {path.resolve()}", ConfigError)
    require(path.is_dir(), f"Data path is not a directory: {path.resolve()}", ConfigError)
    return AppConfig(
        data_dir=path,
        force=force,
        verbose=verbose,
        output_dir=Path(output_dir) if output_dir is not None else None,
    )
