"""JSON export of a computed recovery model."""
import json
import logging
from pathlib import Path
from typing import Dict

import numpy as np
import pandas as pd

from recovery_engine.config import DEFAULT_REPORT_PATH

logger = logging.getLogger(__name__)


class ReportEncoder(json.JSONEncoder):
    """Encodes the numpy columns and scalars that come out of the DataFrame views."""

    def default(self, obj):
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, np.generic):
            return obj.item()
        if isinstance(obj, pd.Timestamp):
            return obj.date().isoformat()
        return super().default(obj)


def frame_to_series(df: pd.DataFrame) -> Dict:
    """Columnar chart payload: ISO dates plus one numpy array per column."""
    series = {"date": [ts.date().isoformat() for ts in df.index]}
    for column in df.columns:
        series[column] = df[column].to_numpy()
    return series


def save_model_json(model_data: Dict, output_path=None) -> Path:
    """Write the model dict as indented JSON, creating the parent directory."""
    output_path = Path(output_path or DEFAULT_REPORT_PATH)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(model_data, f, indent=2, cls=ReportEncoder, ensure_ascii=False)

    logger.info(f"Saved recovery model to {output_path}")
    return output_path
