"""Command-line interface for Regicide."""

from __future__ import annotations

import argparse
import logging
from collections import Counter
from typing import TYPE_CHECKING

from regicide_engine.config import GameConfig
from regicide_engine.engine import TurnEngine

if TYPE_CHECKING:
    from regicide_engine.state import GameSnapshot
    from strategies.base import Strategy

STRATEGIES = ("random", "greedy")


def format_snapshot(snapshot: GameSnapshot) -> str:
    """Format a snapshot for display."""
    lines = []

    lines.append("=" * 60)
    lines.append(
        f"Turn {snapshot.turn_number} | Phase: {snapshot.phase.name} | "
        f"Enemies left: {snapshot.enemies_remaining}"
    )
    lines.append("=" * 60)

    enemy = snapshot.enemy
    if enemy is not None:
        immunity = "cancelled" if enemy.immunity_cancelled else f"immune to {enemy.suit.name.title()}"
        lines.append(
            f"\nEnemy: {enemy.name} ({enemy.card}) HP {enemy.current_hp}/{enemy.max_hp} | "
            f"Attack {enemy.effective_attack} (shield {enemy.shield}) | {immunity}"
        )

    for player in snapshot.players:
        prefix = "→ " if player.index == snapshot.current_player else "  "
        lines.append(f"\n{prefix}{player.name} (hand value {player.hand_value})")
        lines.append("-" * 40)
        hand_str = ", ".join(str(c) for c in player.hand) or "(empty)"
        lines.append(f"  Hand: {hand_str}")
        if player.jester_charges or player.jesters_used:
            lines.append(f"  Jesters: {player.jester_charges} left, {player.jesters_used} used")

    if snapshot.in_play:
        lines.append(f"\nIn play: {', '.join(str(c) for c in snapshot.in_play)}")
    lines.append(
        f"\nTavern: {snapshot.tavern_count} cards | Discard: {snapshot.tavern_discard_count} cards"
        f" | Castle: {snapshot.castle_count} | Defeated: {snapshot.castle_discard_count}"
    )
    if snapshot.required_discard:
        lines.append(f"Must discard at least {snapshot.required_discard}")

    if snapshot.is_game_over:
        lines.append("\n" + "=" * 60)
        if snapshot.defeat_reason:
            lines.append(f"DEFEAT - {snapshot.defeat_reason}")
        else:
            rank = f" ({snapshot.victory_rank.name})" if snapshot.victory_rank is not None else ""
            lines.append(f"VICTORY{rank}")
        lines.append("=" * 60)

    return "\n".join(lines)


def make_strategy(name: str, seed: int | None = None) -> Strategy:
    from strategies.greedy import GreedyStrategy
    from strategies.random_strategy import RandomStrategy

    if name == "greedy":
        return GreedyStrategy()
    if name == "random":
        return RandomStrategy(seed=seed)
    raise ValueError(f"Unknown strategy: {name}")


def watch_game(
    strategy: Strategy, players: int = 1, seed: int | None = None, max_turns: int = 1000
) -> None:
    """Print every action of a single game."""
    engine = TurnEngine(GameConfig.for_players(players, seed=seed))
    while not engine.is_game_over and engine.snapshot().turn_number <= max_turns:
        snapshot = engine.snapshot()
        print(format_snapshot(snapshot))
        action = strategy.select_action(snapshot, engine.legal_actions())
        event = engine.execute(action)
        print(f"\n{snapshot.player.name} ({strategy.name}): {action}")
        for message in event.messages:
            print(f"  {message}")
        print()
    print(format_snapshot(engine.snapshot()))


def run_simulation(
    num_games: int = 100,
    seed: int = 42,
    players: int = 1,
    strategy_name: str = "greedy",
) -> None:
    """Run a batch of games and print statistics."""
    from simulation.runner import run_batch

    strategy = make_strategy(strategy_name, seed=seed)
    print(f"\nRunning {num_games} games: {strategy.name}, {players} player(s)")

    results = run_batch(strategy, num_games, start_seed=seed, player_count=players)

    wins = sum(1 for r in results if r.won)
    ranks = Counter(r.victory_rank for r in results if r.victory_rank)
    avg_turns = sum(r.turns for r in results) / len(results)
    avg_enemies = sum(r.enemies_defeated for r in results) / len(results)
    avg_duration = sum(r.duration_ms for r in results) / len(results)

    print(f"\nResults ({strategy.name}):")
    print(f"  Victories: {wins} ({100*wins/num_games:.1f}%)")
    print(f"  Defeats: {num_games - wins} ({100*(num_games - wins)/num_games:.1f}%)")
    for rank in ("GOLD", "SILVER", "BRONZE"):
        if ranks[rank]:
            print(f"  {rank.title()}: {ranks[rank]}")
    print(f"  Average enemies defeated: {avg_enemies:.1f}")
    print(f"  Average turns: {avg_turns:.1f}")
    print(f"  Average duration: {avg_duration:.2f}ms")


def serve(host: str = "0.0.0.0", port: int = 8000, reload: bool = False) -> None:
    import uvicorn
    from dotenv import load_dotenv

    # FRONTEND_URL and friends may live in a local .env
    load_dotenv()
    uvicorn.run("web.api:app", host=host, port=port, reload=reload)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Regicide card game engine")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Run strategy simulations")
    simulate_parser.add_argument("--games", type=int, default=100, help="Number of games")
    simulate_parser.add_argument("--seed", type=int, default=42, help="Random seed")
    simulate_parser.add_argument(
        "--players", type=int, default=1, choices=[1, 2, 3, 4], help="Number of players"
    )
    simulate_parser.add_argument(
        "--strategy", default="greedy", choices=STRATEGIES, help="Strategy for every seat"
    )
    simulate_parser.add_argument(
        "--verbose", action="store_true", help="Print every action of a single game"
    )

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "simulate":
        if args.verbose:
            watch_game(make_strategy(args.strategy, seed=args.seed), args.players, args.seed)
        else:
            run_simulation(args.games, args.seed, args.players, args.strategy)
    elif args.command == "serve":
        serve(host=args.host, port=args.port, reload=args.reload)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
