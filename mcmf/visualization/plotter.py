# mcmf/visualization/plotter.py
import os
import numpy as np
import pandas as pd
import seaborn as sns
import matplotlib.pyplot as plt


def _setup_style(style: str = "light"):
    """Sets a custom plot style based on the provided parameter."""
    if style == "dark":
        plt.style.use('dark_background')
        plt.rcParams.update({
            "axes.facecolor": "#2b2b2b", "axes.edgecolor": "#cccccc",
            "axes.labelcolor": "white", "axes.titlecolor": "white",
            "figure.facecolor": "#1e1e1e", "grid.color": "#555555",
            "xtick.color": "white", "ytick.color": "white",
            "text.color": "white", "legend.facecolor": "#333333",
        })
        return {"cmap": "mako", "flow_color": "#00ff7f", "cost_color": "#ff6f61"}
    else:  # Default to light style
        plt.style.use('seaborn-v0_8-whitegrid')
        plt.rcParams.update({
            "axes.facecolor": "white", "axes.edgecolor": "black",
            "axes.labelcolor": "black", "axes.titlecolor": "black",
            "figure.facecolor": "white", "grid.color": "#dddddd",
            "xtick.color": "black", "ytick.color": "black",
            "text.color": "black", "legend.facecolor": "white",
        })
        return {"cmap": "viridis", "flow_color": "green", "cost_color": "firebrick"}


def plot_flow_heatmap(flow_matrix: np.ndarray, instance_name: str, output_dir: str, style: str) -> str:
    """Heatmap of the flow carried by each edge (negative entries, i.e. reverse flow, are hidden)."""
    colors = _setup_style(style)
    size = flow_matrix.shape[0]
    fig, ax = plt.subplots(figsize=(max(6, size * 0.6), max(5, size * 0.5)))

    carried = np.clip(flow_matrix, 0, None)
    sns.heatmap(carried, annot=size <= 20, fmt="d", cmap=colors['cmap'],
                mask=(carried == 0) if carried.any() else None, linewidths=0.5, cbar_kws={"label": "Flow"}, ax=ax)

    ax.set_title(f"Flow per Edge for {instance_name}", fontsize=16, pad=15)
    ax.set_xlabel("To vertex", fontsize=12)
    ax.set_ylabel("From vertex", fontsize=12)

    os.makedirs(output_dir, exist_ok=True)
    filepath = os.path.join(output_dir, f"flow_heatmap_{instance_name}.png")
    plt.savefig(filepath, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return filepath


def plot_batch_summary(summary_df: pd.DataFrame, output_dir: str, style: str) -> str:
    """Grouped bars of max flow and min cost for every processed instance."""
    colors = _setup_style(style)
    fig, ax1 = plt.subplots(figsize=(max(8, len(summary_df) * 1.5), 7))

    bar_width = 0.35
    x_pos = np.arange(len(summary_df))

    bars1 = ax1.bar(x_pos - bar_width / 2, summary_df['Max Flow'], bar_width,
                    label='Max Flow', color=colors['flow_color'], alpha=0.7)
    ax1.set_ylabel('Max Flow', color=colors['flow_color'], fontsize=14)
    ax1.set_xticks(x_pos)
    ax1.set_xticklabels(summary_df['Instance'], rotation=45)
    ax1.set_xlabel('Instance', fontsize=14)

    ax2 = ax1.twinx()
    bars2 = ax2.bar(x_pos + bar_width / 2, summary_df['Min Cost'], bar_width,
                    label='Min Cost', color=colors['cost_color'], alpha=0.7)
    ax2.set_ylabel('Min Cost', color=colors['cost_color'], fontsize=14)

    plt.title('Min-Cost Max-Flow per Instance', fontsize=18, fontweight='bold')
    fig.legend(handles=[bars1, bars2], loc='upper left', bbox_to_anchor=(0.1, 0.92))
    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    filepath = os.path.join(output_dir, "batch_summary.png")
    plt.savefig(filepath, dpi=150)
    plt.close(fig)
    return filepath
