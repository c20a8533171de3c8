import os
import pandas as pd
from typing import Any, Dict, List

SUMMARY_COLUMNS = [
    "Instance", "Vertices", "Edges", "Max Flow", "Min Cost",
    "Augmentations", "Reference Flow", "Reference Cost", "Matches Reference", "Execution Time (s)",
]


def build_summary(results: List[Dict[str, Any]]) -> pd.DataFrame:
    """One row per processed instance, in processing order."""
    rows = []
    for res in results:
        reference_flow = res.get("reference_flow")
        reference_cost = res.get("reference_cost")
        matches = None
        if reference_flow is not None:
            matches = reference_flow == res["max_flow"] and reference_cost == res["min_cost"]
        rows.append({
            "Instance": res["instance"], "Vertices": res["num_nodes"], "Edges": res["num_edges"],
            "Max Flow": res["max_flow"], "Min Cost": res["min_cost"],
            "Augmentations": res["augmentations"], "Reference Flow": reference_flow,
            "Reference Cost": reference_cost, "Matches Reference": matches,
            "Execution Time (s)": res["execution_time"],
        })
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def format_summary(summary_df: pd.DataFrame, skipped: List[str]) -> str:
    summary_log = "=" * 80 + "\n--- Batch Summary ---\n" + "=" * 80 + "\n"
    summary_log += f"  Instances solved:  {len(summary_df)}\n"
    summary_log += f"  Instances skipped: {len(skipped)}\n"
    if not summary_df.empty:
        summary_log += f"  Total flow (all instances): {int(summary_df['Max Flow'].sum())}\n"
        summary_log += f"  Total time: {summary_df['Execution Time (s)'].sum():.4f} seconds\n"
        summary_log += "\n" + summary_df.to_string(index=False) + "\n"
    for name in skipped:
        summary_log += f"  Skipped: {name}\n"
    return summary_log


def save_summary(summary_df: pd.DataFrame, output_dir: str) -> str:
    os.makedirs(output_dir, exist_ok=True)
    filepath = os.path.join(output_dir, "batch_summary.csv")
    summary_df.to_csv(filepath, index=False)
    return filepath
