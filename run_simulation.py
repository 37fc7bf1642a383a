"""
Repeated-trial simulation of the weighted roulette.
"""

import sys
import json
import argparse
from datetime import datetime

from roulette import InvalidInput, TRIAL_COUNT, use_seed, derive_seed
from spin import load_config, load_board


def main():
    """Main function to run the simulation."""
    parser = argparse.ArgumentParser(description="Spin the weighted roulette many times and compare against the odds")

    # Option sources
    parser.add_argument("--options", help="Path to an options file (.json, .csv or .txt)")
    parser.add_argument("--option", action="append", help="Option as NAME or NAME:WEIGHT (repeatable)")

    # Simulation parameters
    parser.add_argument("--trials", type=int, help=f"Number of spins per run (default: {TRIAL_COUNT})")
    parser.add_argument("--num-runs", type=int, default=1, help="Number of independent runs")
    parser.add_argument("--seed", type=int, help="Base random seed; each run derives its own seed from it")
    parser.add_argument("--tolerance", type=float, default=5.0, help="Allowed gap from the expected percentage, in points")
    parser.add_argument("--description", help="Description of the simulation")

    # Output configuration
    parser.add_argument("--results-file", default="simulation_results.json", help="Output file for results")

    args = parser.parse_args()

    try:
        config = load_config(args)
        board = load_board(config)
    except InvalidInput as e:
        print(f"❌ {e}")
        sys.exit(1)

    if args.trials is not None:
        trial_count = args.trials
    elif config.trial_count is not None:
        trial_count = config.trial_count
    else:
        trial_count = TRIAL_COUNT
    base_seed = args.seed if args.seed is not None else config.seed
    description = args.description or config.description or "Roulette simulation"

    print(f"🎡 Loaded {len(board)} options")
    print(f"🚀 Starting simulation: {description} ({trial_count} trials x {args.num_runs} runs)")

    results = {
        "metadata": {
            "timestamp": datetime.now().isoformat(),
            "description": description,
            "options": [option.to_dict() for option in board.snapshot()],
            "trial_count": trial_count,
            "num_runs": args.num_runs,
            "seed": base_seed,
            "tolerance": args.tolerance,
        },
        "results": {}
    }

    all_ok = True
    for run_idx in range(args.num_runs):
        print(f"\n🔄 Run {run_idx + 1}/{args.num_runs}")
        try:
            if base_seed is not None:
                with use_seed(derive_seed(base_seed, trial_count, run_idx)):
                    report = board.simulate(trial_count)
            else:
                report = board.simulate(trial_count)
        except InvalidInput as e:
            print(f"❌ {e}")
            sys.exit(1)

        print(f"   {trial_count} trials:")
        for line in report.format_lines():
            print(f"   {line}")

        ok = report.within_tolerance(args.tolerance)
        all_ok = all_ok and ok
        status = "✅" if ok else "⚠️ "
        print(f"   {status} Max deviation: {report.max_deviation():.2f} points | Chi-square: {report.chi_square():.3f}")

        results["results"][str(run_idx)] = report.to_dict()

    with open(args.results_file, 'w') as f:
        json.dump(results, f, indent=2, ensure_ascii=False)

    if all_ok:
        print(f"\n✅ Simulation completed! All runs within ±{args.tolerance:.1f} points. Results saved to {args.results_file}")
    else:
        print(f"\n⚠️  Simulation completed with runs outside ±{args.tolerance:.1f} points. Results saved to {args.results_file}")


if __name__ == "__main__":
    main()
