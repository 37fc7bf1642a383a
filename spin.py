"""
Spin the weighted roulette once and report the winner.
"""

import sys
import argparse

from roulette import InvalidInput, OptionBoard, OptionsConfig, use_seed


def load_config(args: argparse.Namespace) -> OptionsConfig:
    """Options come from --options FILE when given, otherwise from --option flags."""
    if args.options:
        return OptionsConfig.from_file(args.options)
    return OptionsConfig.from_specs(args.option or [])


def load_board(config: OptionsConfig) -> OptionBoard:
    # With no options at all the picker starts from its two defaults
    if not config.raw_options:
        return OptionBoard()
    return OptionBoard(config.options())


def main():
    """Main function to run a single spin."""
    parser = argparse.ArgumentParser(description="Spin the weighted roulette once")

    # Option sources
    parser.add_argument("--options", help="Path to an options file (.json, .csv or .txt)")
    parser.add_argument("--option", action="append", help="Option as NAME or NAME:WEIGHT (repeatable)")

    parser.add_argument("--seed", type=int, help="Random seed for a reproducible spin")

    args = parser.parse_args()

    try:
        config = load_config(args)
        board = load_board(config)
        seed = args.seed if args.seed is not None else config.seed

        if seed is not None:
            with use_seed(seed):
                result = board.spin()
        else:
            result = board.spin()
    except InvalidInput as e:
        print(f"❌ {e}")
        sys.exit(1)

    print(f"🎡 Spinning {len(board)} options...")
    for sector in board.sectors():
        print(f"   {sector.name}: weight {sector.weight}")
    print(f"\n🎉 Result: {result.winner.name}")
    print(f"   Wheel stops at {result.target.final_degrees:.1f}° after {result.target.rotation_degrees:.1f}° of rotation")


if __name__ == "__main__":
    main()
