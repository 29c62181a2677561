import argparse
import logging

from drawpoker.models import TableConfig

from .console import ConsoleGame


def main() -> None:
    parser = argparse.ArgumentParser(description="Heads-up five card draw against the house bot")
    parser.add_argument("--starting-stack", type=int, default=1_000)
    parser.add_argument("--sb", type=int, default=25)
    parser.add_argument("--bb", type=int, default=50)
    parser.add_argument("--seed", type=int, default=None, help="Seed for shuffling and house decisions")
    parser.add_argument("--name", default="You", help="Name shown for the human seat")
    parser.add_argument("--verbose", action="store_true", help="Log engine transitions")
    args = parser.parse_args()

    # Log lines would interleave with prompts, so stay quiet unless asked.
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    config = TableConfig(
        starting_stack=args.starting_stack,
        sb=args.sb,
        bb=args.bb,
        human_name=args.name,
        seed=args.seed,
    )
    try:
        ConsoleGame(config).run()
    except (KeyboardInterrupt, EOFError):
        print()


if __name__ == "__main__":
    main()
