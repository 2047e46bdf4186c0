import argparse
import logging

from .game import GameEngine
from .models import TableConfig

logging.basicConfig(level=logging.INFO)
LOGGER = logging.getLogger("holdem")


def main() -> None:
    parser = argparse.ArgumentParser(description="Play a blinds-only Texas Hold'em tournament")
    parser.add_argument("--players", type=int, default=4)
    parser.add_argument("--chips", type=int, default=100, help="Buy-in for every player")
    parser.add_argument("--sb", type=int, default=2)
    parser.add_argument("--bb", type=int, default=5)
    parser.add_argument("--max-players", type=int, default=10)
    parser.add_argument("--min-buy-in", type=int, default=100)
    parser.add_argument("--currency", default="USD")
    parser.add_argument("--rounds", type=int, default=None, help="Stop after this many rounds")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--verbose", action="store_true", help="Log every hand at showdown")
    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    config = TableConfig(
        max_players=args.max_players,
        min_buy_in=args.min_buy_in,
        sb=args.sb,
        bb=args.bb,
        currency=args.currency,
        seed=args.seed,
    )
    engine = GameEngine(config)
    for idx in range(args.players):
        engine.buy_in(f"Player{idx + 1}", args.chips)

    results = engine.play_tournament(max_rounds=args.rounds)
    LOGGER.info("Played %s rounds", len(results))
    for place, player in enumerate(engine.leaderboard(), start=1):
        LOGGER.info("%2d. %s: %s %s", place, player.name, player.chips, config.currency)


if __name__ == "__main__":
    main()
