from __future__ import annotations
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from . import canon
from .types import DashboardData, MonthSummary

logger = logging.getLogger(__name__)


def build_dashboard(
    months: Iterable[MonthSummary], generated_at: Optional[datetime] = None
) -> DashboardData:
    stamp = generated_at or datetime.now()
    return DashboardData(
        months=sorted(months, key=lambda m: (m.year, m.month)),
        generated_at=stamp.isoformat(timespec="seconds"),
    )


def export_dashboard(
    output_dir: Path,
    months: Iterable[MonthSummary],
    generated_at: Optional[datetime] = None,
) -> Path:
    """
    Write dashboard-data.json under output_dir, replacing any previous rollup.

    The document is written to a sibling temp file first and then moved over
    the target, so readers only ever see a complete file.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    data = build_dashboard(months, generated_at)
    target = output_dir / canon.DASHBOARD_FILE
    tmp = target.with_name(target.name + ".tmp")
    tmp.write_text(data.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
    tmp.replace(target)

    logger.info("Dashboard data exported to: %s", target.resolve())
    logger.debug(
        "Exported %d month(s) with %d days",
        len(data.months),
        sum(len(m.days) for m in data.months),
    )
    return target
