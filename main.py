import os
import re
import sys
import glob
import time
import argparse
import logging
import pandas as pd

from mcmf.algorithms.errors import FlowError
from mcmf.algorithms.min_cost_flow import MinCostFlowEngine
from mcmf.data.network_reader import read_network, compute_reference_max_flow
from mcmf.utils.config import Config
from mcmf.utils.logging_utils import setup_main_logger
from mcmf.visualization.matrix_view import format_matrix
from mcmf.visualization.plotter import plot_flow_heatmap, plot_batch_summary
from mcmf.visualization.stats import build_summary, format_summary, save_summary


def get_number_from_filename(filename: str) -> int:
    match = re.search(r'(\d+)', os.path.basename(filename))
    return int(match.group(1)) if match else 0


def list_network_files(network_dir: str, pattern: str) -> list:
    """Network files in `network_dir` sorted by the first number in their name, then by name."""
    network_files = glob.glob(os.path.join(network_dir, pattern))
    return sorted(network_files, key=lambda f: (get_number_from_filename(f), os.path.basename(f)))


def run_instance(network_path: str, config: Config) -> dict:
    """
    Solves one network file end to end: load, max flow, per-edge report, optional plots.
    Raises FileNotFoundError or a FlowError when the file cannot be solved.
    """
    instance_name = os.path.splitext(os.path.basename(network_path))[0]
    output_dir = os.path.join(config.get('output.results_directory'), instance_name)
    logger = setup_main_logger(output_dir, instance_name, config.get('output.verbose', False))

    logger.info("=" * 60)
    logger.info(f"--- FIND FLOW FOR INSTANCE: {instance_name} ---")
    logger.info("=" * 60)

    network_data = read_network(network_path)
    network = network_data.network
    logger.info(
    f'''\n    ----- Network Info -----
        Filename: {network_data.info["filename"]}
        Number of nodes: {network_data.info["num_nodes"]}
        Number of edges: {network_data.info["num_edges"]}
        Source: {network_data.info["source"]}
        Sink: {network_data.info["sink"]}
        Total source capacity: {network_data.info["total_source_capacity"]}
        Total sink capacity: {network_data.info["total_sink_capacity"]}
    ------------------------\n'''
    )

    show_matrices = config.get('report.show_matrices', True)
    if show_matrices:
        logger.info(format_matrix(f"{instance_name} edge cost", network.cost))
        logger.info(format_matrix(f"{instance_name} capacity", network.original_capacity))

    detect_cycles = config.get('algorithm.detect_negative_cycles', True)
    engine = MinCostFlowEngine(network, logger, detect_negative_cycles=detect_cycles)

    start_time = time.time()
    max_flow = engine.max_flow()
    execution_time = time.time() - start_time

    if show_matrices:
        logger.info(format_matrix(f"{instance_name} residual", network.residual))

    edge_flows = engine.edge_flows()
    flows_df = pd.DataFrame(edge_flows, columns=["source", "target", "amount", "cost"])
    logger.info("Final flow on each edge")
    for flow in edge_flows:
        if flow.amount > 0:
            logger.info(f"Flow {flow.source} -> {flow.target} carries: {flow.amount}, cost: {flow.cost}")
    logger.info(f"Max flow: {max_flow}, min cost: {engine.total_cost}, augmentations: {engine.augmentations}")

    result = {
        "instance": instance_name,
        "num_nodes": network_data.info["num_nodes"],
        "num_edges": network_data.info["num_edges"],
        "max_flow": max_flow,
        "min_cost": engine.total_cost,
        "augmentations": engine.augmentations,
        "execution_time": execution_time,
        "reference_flow": None,
        "reference_cost": None,
    }

    if config.get('report.reference_check', True):
        reference_flow, reference_cost = compute_reference_max_flow(network_data)
        result["reference_flow"], result["reference_cost"] = reference_flow, reference_cost
        if (reference_flow, reference_cost) != (max_flow, engine.total_cost):
            logger.warning(
                f"Reference mismatch: networkx gives flow {reference_flow} at cost {reference_cost}"
            )

    if config.get('output.save_results', True):
        csv_path = os.path.join(output_dir, f"edge_flows_{instance_name}.csv")
        flows_df.to_csv(csv_path, index=False)
        logger.info(f"  -> Saved edge flows to: {csv_path}")

    if config.get('visualization.save_plots', False):
        plot_path = plot_flow_heatmap(network.flow_matrix(), instance_name, output_dir,
                                      style=config.get('visualization.style', 'light'))
        logger.info(f"  -> Saved flow heatmap to: {plot_path}")

    if config.get('report.draining_report', False):
        network.reset()
        logger.info("Draining report (approximate, each path edge is emptied)")
        drain = MinCostFlowEngine(network, logger, detect_negative_cycles=detect_cycles)
        for flow in drain.report_flow_per_edge():
            logger.info(f"Flow {flow.source} -> {flow.target} fits: {flow.amount}, cost: {flow.cost}")

    logger.info(f"\n--- Instance {instance_name} Complete ---")
    return result


def run_batch(network_paths: list, config: Config):
    """Solves every file in order. Files that fail to load or solve are skipped."""
    results, skipped = [], []
    for network_path in network_paths:
        try:
            results.append(run_instance(network_path, config))
        except (FlowError, FileNotFoundError) as e:
            logging.getLogger().error(f"Skipping {network_path}: {e}")
            skipped.append(os.path.basename(network_path))

    results_dir = config.get('output.results_directory')
    logger = setup_main_logger(results_dir, "batch_summary", config.get('output.verbose', False))
    summary_df = build_summary(results)
    logger.info(format_summary(summary_df, skipped))

    if config.get('output.save_results', True):
        logger.info(f"  -> Saved batch summary to: {save_summary(summary_df, results_dir)}")
    if config.get('visualization.save_plots', False) and not summary_df.empty:
        plot_path = plot_batch_summary(summary_df, results_dir, style=config.get('visualization.style', 'light'))
        logger.info(f"  -> Saved batch summary plot to: {plot_path}")

    return results, skipped


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Compute min-cost max-flow for network files")
    parser.add_argument('--network', type=str, help='Path to a specific network file.')
    parser.add_argument('--all', action='store_true', help='Run for all networks in the network directory.')
    parser.add_argument('--directory', type=str, help='Network directory used with --all.')
    parser.add_argument('--config', type=str, default='config.yaml', help='Path to config file.')
    parser.add_argument('--draining-report', action='store_true', help='Also print the draining per-edge report.')
    parser.add_argument('--plots', action='store_true', help='Save flow heatmaps and the batch summary plot.')
    args = parser.parse_args(argv)

    config = Config(args.config)
    if args.draining_report:
        config.set('report.draining_report', True)
    if args.plots:
        config.set('visualization.save_plots', True)

    if args.network:
        try:
            run_instance(args.network, config)
        except (FlowError, FileNotFoundError) as e:
            logging.getLogger().error(f"Error: {e}")
            return 1
        return 0
    elif args.all:
        network_dir = args.directory or config.get('network.directory')
        network_files = list_network_files(network_dir, config.get('network.pattern', '*.txt'))
        if not network_files:
            print(f"No network files found in {network_dir}")
            return 0

        print("\n" + "=" * 70)
        print("Processing networks in numerical order based on filename:")
        print("=" * 70)
        run_batch(network_files, config)
        print("\nAll networks are processed.")
        return 0
    else:
        print("Error: Please specify a network file with --network <path> or use --all.")
        return 2


if __name__ == "__main__":
    sys.exit(main())
