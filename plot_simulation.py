import json
import argparse
import numpy as np
import matplotlib.pyplot as plt
from typing import List, Dict, Tuple, Optional
from matplotlib.gridspec import GridSpec
import matplotlib.colors as mcolors

from roulette import Option, sectors


def load_and_process_data(
    json_file: str,
) -> Tuple[str, List[Option], List[str], List[float], List[float], List[float]]:
    """
    Load and process data from a simulation results JSON file.

    Percentages are averaged over all runs in the file.

    Returns
    -------
    tuple
        (description, options, names, observed_mean, observed_std, theoretical)
    """
    with open(json_file, "r", encoding="utf-8") as f:
        data: Dict = json.load(f)

    description: str = data["metadata"].get("description", "No description available")
    options: List[Option] = [Option.from_dict(o) for o in data["metadata"].get("options", [])]
    runs: List[Dict] = list(data["results"].values())
    if not runs:
        raise ValueError(f"No runs found in {json_file}")

    names: List[str] = list(runs[0]["options"].keys())
    observed_mean: List[float] = []
    observed_std: List[float] = []
    theoretical: List[float] = []

    for name in names:
        percentages = [run["options"][name]["percentage"] for run in runs if name in run["options"]]
        observed_mean.append(float(np.mean(percentages)))
        observed_std.append(float(np.std(percentages)))
        entry = runs[0]["options"][name]
        theoretical.append(entry.get("expected_share", entry["theoretical"]))

    return description, options, names, observed_mean, observed_std, theoretical


def generate_colors(num_datasets: int) -> List[str]:
    """
    Generate bar colors for the given number of datasets.

    Parameters
    ----------
    num_datasets : int
        Number of datasets to generate colors for.

    Returns
    -------
    list
        Hex color strings
    """
    base_colors = [
        "#1f77b4",
        "#ff7f0e",
        "#2ca02c",
        "#d62728",
        "#9467bd",
        "#8c564b",
        "#e377c2",
        "#7f7f7f",
        "#bcbd22",
        "#17becf",
    ]

    if num_datasets > len(base_colors):
        additional_colors = plt.cm.tab20(range(len(base_colors), num_datasets))
        return base_colors + [mcolors.to_hex(c) for c in additional_colors]
    return base_colors[:num_datasets]


def plot_simulation(json_files: List[str], output_image: str, title: Optional[str] = None, wheel: bool = False) -> None:
    """
    Compare observed win percentages against the theoretical odds.

    Parameters
    ----------
    json_files : List[str]
        List of paths to simulation results JSON files.
    output_image : str
        Path for saving the output figure.
    title : Optional[str], optional
        Custom title for the plot. If None, a default title will be generated.
    wheel : bool, optional
        Also draw the wheel of the first file as a pie chart.
    """
    if not json_files:
        raise ValueError("At least one JSON file must be provided")

    # Basic style settings
    plt.rcParams["font.family"] = "DejaVu Sans"
    plt.rcParams["figure.facecolor"] = "white"
    plt.rcParams["axes.grid"] = True
    plt.rcParams["grid.linestyle"] = "--"
    plt.rcParams["grid.alpha"] = 0.5

    datasets = []
    for json_file in json_files:
        desc, options, names, observed_mean, observed_std, theoretical = load_and_process_data(json_file)
        datasets.append(
            {
                "description": desc,
                "options": options,
                "names": names,
                "observed_mean": observed_mean,
                "observed_std": observed_std,
                "theoretical": theoretical,
            }
        )

    all_names = [dataset["names"] for dataset in datasets]
    if not all(names == all_names[0] for names in all_names):
        print("Warning: Option names differ between files. Plotting the names of the first file.")
    names = all_names[0]

    colors = generate_colors(len(datasets))

    if wheel:
        fig = plt.figure(figsize=(16, 8))
        gs = GridSpec(1, 2, width_ratios=[3, 2], wspace=0.25)
    else:
        fig = plt.figure(figsize=(12, 8))
        gs = GridSpec(1, 1)

    # Plot 1: observed vs theoretical per option
    ax1 = fig.add_subplot(gs[0])
    x_positions = list(range(len(names)))
    bar_width = 0.8 / len(datasets)

    for i, dataset in enumerate(datasets):
        offsets = [x - 0.4 + bar_width * (i + 0.5) for x in x_positions]
        values = [
            dataset["observed_mean"][dataset["names"].index(name)] if name in dataset["names"] else 0.0
            for name in names
        ]
        errors = [
            dataset["observed_std"][dataset["names"].index(name)] if name in dataset["names"] else 0.0
            for name in names
        ]
        ax1.bar(
            offsets,
            values,
            width=bar_width,
            yerr=errors,
            color=colors[i],
            alpha=0.8,
            capsize=4,
            label=f"{dataset['description']}",
        )
        for x, value in zip(offsets, values):
            ax1.annotate(
                f"{value:.1f}%",
                xy=(x, value),
                xytext=(0, 5),
                textcoords="offset points",
                ha="center",
                fontsize=7,
                fontweight="bold",
                color=colors[i],
            )

    # Theoretical odds as horizontal ticks across each group
    for x, expected in zip(x_positions, datasets[0]["theoretical"]):
        ax1.hlines(expected, x - 0.45, x + 0.45, colors="black", linestyles="--", linewidth=1.5)
    ax1.plot([], [], color="black", linestyle="--", label="Theoretical")

    ax1.set_title(title or "Observed vs Theoretical Win Percentage", pad=20, fontsize=14, fontweight="bold")
    ax1.set_ylabel("Win %", fontsize=12)
    ax1.set_xticks(x_positions)
    ax1.set_xticklabels(names, rotation=30, ha="right")
    ax1.grid(True, linestyle="--", alpha=0.7)
    ax1.legend(fontsize=10, loc="best")

    # Plot 2: the wheel itself
    if wheel:
        ax2 = fig.add_subplot(gs[1])
        wheel_sectors = sectors(datasets[0]["options"])
        if wheel_sectors:
            ax2.pie(
                [sector.weight for sector in wheel_sectors],
                labels=[sector.name for sector in wheel_sectors],
                colors=[sector.color for sector in wheel_sectors],
                startangle=90,
                counterclock=False,
                wedgeprops=dict(edgecolor="white", linewidth=1.5),
            )
        ax2.set_title("Wheel", pad=20, fontsize=14, fontweight="bold")
        ax2.axis("equal")

    plt.tight_layout()
    plt.savefig(output_image, dpi=300, bbox_inches="tight")
    plt.close(fig)
    print(f"Plot saved to {output_image}")


def main():
    parser = argparse.ArgumentParser(description="Plot roulette simulation results")
    parser.add_argument("json_files", nargs="+", help="Simulation results JSON files")
    parser.add_argument("--output", default="simulation_plot.png", help="Output image path")
    parser.add_argument("--title", help="Custom plot title")
    parser.add_argument("--wheel", action="store_true", help="Also draw the wheel of the first file")
    args = parser.parse_args()

    plot_simulation(args.json_files, args.output, args.title, args.wheel)


if __name__ == "__main__":
    main()
