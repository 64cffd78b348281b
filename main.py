#!/usr/bin/env python3
"""
hexdungeon - Entry Point
═══════════════════════════════════════════════════════════════════════════

Rozgrywa partię gracz vs bot bez warstwy prezentacji.

Użycie:
    python main.py                      # Domyślny seed
    python main.py --seed 12345         # Konkretny seed
    python main.py --algorithm astar    # Ścieżka z odcinków A*
    python main.py --verbose            # Szczegółowy output

Wynik:
    - Wypisuje przebieg partii na konsolę
    - Zapisuje pełny log do output/game_{seed}.json
"""

import argparse
import asyncio
import sys

from hexdungeon.agents.agent import AgentId
from hexdungeon.core.errors import HexDungeonError
from hexdungeon.events.event_logger import EventType
from hexdungeon.game.config import load_game_config
from hexdungeon.game.session import GameSession
from hexdungeon.logger_config import configure_logging


def _overrides(args: argparse.Namespace) -> dict:
    overrides = {"bot": {"turn_delay": 0.0}}
    board = {}
    if args.algorithm:
        board["path_algorithm"] = args.algorithm
    if args.radius is not None:
        board["grid_radius"] = args.radius
    if args.length is not None:
        board["path_length"] = args.length
    if board:
        overrides["board"] = board
    if args.hazards is not None:
        overrides["hazards"] = {"count": args.hazards}
    return overrides


def main():
    """Główna funkcja."""
    parser = argparse.ArgumentParser(
        description="hexdungeon - player vs bot on a hex board",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--seed", type=int, default=12345, help="Ziarno losowości (domyślnie: 12345)")
    parser.add_argument("--algorithm", choices=["random_walk", "astar"], help="Algorytm ścieżki")
    parser.add_argument("--radius", type=int, help="Promień siatki")
    parser.add_argument("--length", type=int, help="Długość ścieżki")
    parser.add_argument("--hazards", type=int, help="Liczba goblinów")
    parser.add_argument("--config", help="Plik YAML nadpisujący defaults")
    parser.add_argument("--verbose", "-v", action="store_true", help="Szczegółowy output")
    parser.add_argument("--no-save", action="store_true", help="Nie zapisuj logu do pliku")

    args = parser.parse_args()
    configure_logging(verbose=args.verbose)

    print("=" * 60)
    print("HEXDUNGEON")
    print("=" * 60)
    print(f"Seed: {args.seed}")

    try:
        config = load_game_config(_overrides(args), config_file=args.config)
        session = GameSession(config, seed=args.seed)
    except (HexDungeonError, FileNotFoundError) as exc:
        print(f"❌ Nie udało się zbudować gry: {exc}")
        return 1

    board = session.board
    print(f"Plansza: {len(board.grid)} komórek, ścieżka {board.path_length} ({board.path.algorithm})")
    print(f"Gobliny: {', '.join(f'{i}: {board.hazard_names[i]}' for i in sorted(board.hazards))}")
    if args.verbose:
        print()
        print(board.grid.debug_print())
    print()
    print("-" * 60)
    print("START")
    print("-" * 60)

    winner = asyncio.run(session.play_out())

    for event in session.events.events:
        if event.event_type == EventType.AGENT_MOVE:
            print(f"  [{event.turn:3d}] {event.agent_id:6s} {event.data['from']:2d} -> {event.data['to']:2d}")
        elif event.event_type == EventType.HAZARD_TRIGGERED:
            name = event.data.get("hazard_name", "goblin")
            print(f"        💥 {name}: -{event.data['damage']} HP ({event.data['hp_after']} left)")

    print()
    print("=" * 60)
    print("WYNIKI")
    print("=" * 60)
    if winner is not None:
        print(f"🏆 ZWYCIĘZCA: {winner.value} (tura {session.engine.state.turn_number})")
    else:
        print("⌛ Limit tur przekroczony")
    for agent_id in AgentId:
        agent = session.engine.agents[agent_id]
        print(f"  - {agent_id.value}: pole {agent.position_index}/{agent.goal_index}, HP {agent.hit_points}/{agent.max_hp}")

    if not args.no_save:
        output_path = f"output/game_{args.seed}.json"
        session.events.save(output_path)
        print()
        print(f"📄 Log zapisany: {output_path}")

    if args.verbose:
        print()
        print("-" * 60)
        print("STATYSTYKI ZDARZEŃ")
        print("-" * 60)
        for event_type in EventType:
            count = len(session.events.get_events_by_type(event_type))
            if count > 0:
                print(f"  {event_type.name}: {count}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
