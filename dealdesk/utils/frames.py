"""DataFrame conversion helpers."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import pandas as pd
from pydantic import BaseModel


def models_to_df(objects: Iterable[BaseModel], columns: Sequence[str] | None = None) -> pd.DataFrame:
    """Convert pydantic models to a DataFrame, optionally keeping only ``columns``."""
    rows = [obj.model_dump(mode="json") for obj in objects]
    if not rows:
        return pd.DataFrame(columns=list(columns or []))

    df = pd.DataFrame(rows)
    if columns:
        df = df[list(columns)]
    return df
