"""Entry point: roll a dice pool once from the command line."""

import argparse
import sys
from typing import Dict, List, Sequence

from src.dicepool.config.settings import settings
from src.dicepool.core import RulesEngine, compute_die_stats, initialize_rules_engine
from src.dicepool.exceptions import DicePoolError
from src.dicepool.models import (
    FaceTable,
    FixedDie,
    PriorityMode,
    RepeatDiceConfig,
    RepeatRollConfig,
    RerollCondition,
    RerollConditionType,
    RollResult,
    StateEffects,
)
from src.dicepool.scenarios import create_demo_face_table
from src.dicepool.storage import load_face_table
from src.dicepool.utils.logging import setup_logging

REROLL_CONDITIONS = {
    "below-expected": RerollConditionType.BELOW_EXPECTED,
    "min": RerollConditionType.MIN_SYMBOL,
    "absent": RerollConditionType.NO_SYMBOL,
}


# ─────────────────────────────────────────────────────────────────────────────
# Argument parsing
# ─────────────────────────────────────────────────────────────────────────────
def parse_pool(text: str) -> Dict[str, int]:
    """'RED=3,blue=2' -> {'RED': 3, 'blue': 2}"""
    pool: Dict[str, int] = {}
    for item in filter(None, (part.strip() for part in text.split(","))):
        color, sep, count = item.partition("=")
        if not sep:
            raise argparse.ArgumentTypeError(f"Expected COLOR=COUNT, got {item!r}")
        try:
            pool[color.strip()] = int(count)
        except ValueError:
            raise argparse.ArgumentTypeError(f"Die count must be an integer: {item!r}")
    return pool


def parse_fixed(text: str) -> List[FixedDie]:
    """'RED:1,BLUE:0' -> forced faces, in order"""
    fixed: List[FixedDie] = []
    for item in filter(None, (part.strip() for part in text.split(","))):
        color, sep, index = item.partition(":")
        if not sep:
            raise argparse.ArgumentTypeError(f"Expected COLOR:FACE, got {item!r}")
        try:
            fixed.append(FixedDie(color=color.strip(), face_index=int(index)))
        except ValueError:
            raise argparse.ArgumentTypeError(f"Face index must be an integer: {item!r}")
    return fixed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m src.dicepool",
        description="Roll a dice pool once, with optional rerolls and combat states.",
    )
    parser.add_argument("--pool", type=parse_pool, default={}, help="Dice to roll, e.g. RED=3,BLUE=2")
    parser.add_argument("--faces", help="Face table JSON (default: settings, else the demo table)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible roll")

    reroll = parser.add_argument_group("full reroll")
    reroll.add_argument("--reroll-if", choices=sorted(REROLL_CONDITIONS), help="Reroll the whole pool once when...")
    reroll.add_argument("--reroll-symbol", default="hits", help="Symbol the condition looks at")
    reroll.add_argument("--threshold", type=float, default=0, help="Minimum count for --reroll-if min")

    selective = parser.add_argument_group("selective reroll")
    selective.add_argument("--reroll-dice", type=int, default=0, metavar="N", help="Reroll up to N worst dice")
    selective.add_argument("--priority", choices=[m.value for m in PriorityMode], default=PriorityMode.HITS.value)
    selective.add_argument("--hollow-as-filled", action="store_true", help="Hollow symbols score like filled ones")

    states = parser.add_argument_group("combat states")
    states.add_argument("--disarmed", action="store_true", help="Cancel the die with the most hits")
    states.add_argument("--vulnerable", action="store_true", help="Cancel the die with the most blocks")

    parser.add_argument("--fixed", type=parse_fixed, default=[], help="Forced faces, e.g. RED:1,BLUE:0")
    parser.add_argument("--stats", action="store_true", help="Print per-color face statistics and exit")
    return parser


# ─────────────────────────────────────────────────────────────────────────────
# Face table & output
# ─────────────────────────────────────────────────────────────────────────────
def resolve_face_table(faces: str | None) -> FaceTable:
    """Explicit file, then the configured file if present, then the demo table."""
    if faces:
        return load_face_table(faces)
    if settings.faces_path.is_file():
        return load_face_table(settings.faces_path, required_colors=settings.required_colors)
    return create_demo_face_table()


def format_result(result: RollResult) -> str:
    lines = ["Aggregate:"]
    for name, value in result.aggregate.as_dict().items():
        lines.append(f"  {name:<16}{value}")

    if result.dice is not None:
        lines.append("Dice:")
        for idx, die in enumerate(result.dice):
            shown = {k: v for k, v in die.symbols.as_dict().items() if v}
            forced = " (fixed)" if die.fixed else ""
            lines.append(f"  #{idx} {die.color} face {die.face_index}{forced}: {shown or '-'}")

    stats = result.stats
    lines.append(
        f"Full rerolls: {stats.full_rerolls_occurred}  Dice rerolled: {stats.dice_rerolled_count}"
    )
    return "\n".join(lines)


def format_stats(face_table: FaceTable) -> str:
    lines = []
    for color, faces in face_table.faces.items():
        s = compute_die_stats(faces, color)
        lines.append(
            f"{color:<8}{s['primary_label']} {s['primary_pct']:.1f}%  "
            f"{s['secondary_label']} {s['secondary_pct']:.1f}%"
        )
    return "\n".join(lines)


def run(args: argparse.Namespace, engine: RulesEngine) -> RollResult:
    repeat_roll = None
    if args.reroll_if:
        repeat_roll = RepeatRollConfig(
            enabled=True,
            condition=RerollCondition(
                type=REROLL_CONDITIONS[args.reroll_if],
                symbol=args.reroll_symbol,
                threshold=args.threshold,
            ),
        )

    repeat_dice = None
    if args.reroll_dice > 0:
        repeat_dice = RepeatDiceConfig(
            enabled=True,
            max_dice_to_reroll=args.reroll_dice,
            priority_mode=args.priority,
            count_hollow_as_filled=args.hollow_as_filled,
        )

    states = StateEffects(disarmed=args.disarmed, vulnerable=args.vulnerable)
    return engine.roll(
        args.pool,
        repeat_roll=repeat_roll,
        repeat_dice=repeat_dice,
        states=states,
        fixed_dice=args.fixed,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.stats and not args.pool:
        parser.error("--pool is required unless --stats is given")

    try:
        logger = setup_logging(
            level=settings.log_level,
            log_file=settings.log_file,
            enable_color=settings.enable_color,
        )
        logger.debug("Configuration: %s", settings)

        face_table = resolve_face_table(args.faces)
        if args.stats:
            print(format_stats(face_table))
            return 0
        seed = args.seed if args.seed is not None else settings.seed
        engine = initialize_rules_engine(face_table, seed=seed)
        result = run(args, engine)
    except (DicePoolError, ValueError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    print(format_result(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
