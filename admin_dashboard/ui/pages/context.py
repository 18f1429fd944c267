from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pandas as pd

from admin_dashboard.config import Settings
from admin_dashboard.data.filters import DashboardState


@dataclass
class PageContext:
    submissions_df: pd.DataFrame
    state: DashboardState
    settings: Settings
    error: Optional[str] = None
