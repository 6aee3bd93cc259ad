"""
Command-line entrypoint.

    python -m gamepilot recommend --library games.json --mood intense --time short
    python -m gamepilot browse --library games.yaml --master-mood zen

Results are written to stdout; logs go to stderr.
"""
import argparse
import json
import logging
import sys
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .config_loader import Config
from .logging_utils import RunSummary, add_logging_args, configure_logging, resolve_log_level, truncate_list
from .records import SessionBucket, UserContext, record_to_dict
from .service import Recommendation, RecommendationService
from .taxonomy import MasterMoodId, MoodId, normalize_master_mood

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2


def load_library(path: str) -> List[Dict[str, Any]]:
    """
    Read raw game dicts from a JSON or YAML file.

    The file holds either a list of games or a mapping with a 'games' list.

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if the content has neither shape
    """
    library_path = Path(path)
    if not library_path.exists():
        raise FileNotFoundError(f"Library file not found: {path}")

    text = library_path.read_text(encoding="utf-8")
    if library_path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        # YAML is a superset of JSON, so anything else goes through the YAML parser
        data = yaml.safe_load(text)

    if isinstance(data, dict):
        data = data.get("games")
    if not isinstance(data, list):
        raise ValueError(f"Library file must contain a list of games or a 'games' list: {path}")
    return data


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="gamepilot", description="Mood-aware game recommendations for a library")
    subparsers = parser.add_subparsers(dest="command", required=True)

    recommend = subparsers.add_parser("recommend", help="Rank the library for a mood and session length")
    recommend.add_argument("--library", required=True, metavar="FILE", help="JSON or YAML library file")
    recommend.add_argument(
        "--mood",
        default=None,
        help=f"Target mood ({', '.join(m.value for m in MoodId if m is not MoodId.UNKNOWN)}); omit for neutral",
    )
    recommend.add_argument(
        "--time",
        default=SessionBucket.MEDIUM.value,
        help="Session length: short, medium, long or minutes (default: medium)",
    )
    recommend.add_argument("--genre", default=None, help="Preferred genre")
    recommend.add_argument("--limit", type=int, default=None, help="Number of results (default from config, else 10)")
    recommend.add_argument("--json", action="store_true", help="Emit JSON instead of a text table")

    browse = subparsers.add_parser("browse", help="List games under a master mood")
    browse.add_argument("--library", required=True, metavar="FILE", help="JSON or YAML library file")
    browse.add_argument(
        "--master-mood",
        required=True,
        help=f"Master mood ({', '.join(m.value for m in MasterMoodId)})",
    )
    browse.add_argument("--search", default=None, help="Only titles containing this text")
    browse.add_argument("--json", action="store_true", help="Emit JSON instead of a title list")

    for sub in (recommend, browse):
        sub.add_argument("--config", default=None, help="Path to config.yaml (default: built-in settings)")
        add_logging_args(sub)

    return parser.parse_args(argv)


def _write(text: str) -> None:
    sys.stdout.write(text + "\n")


def _format_recommendation(rank: int, rec: Recommendation) -> str:
    score = rec.score
    reasoning = score.reasoning
    lines = [f"{rank:>2}. {rec.game.title or rec.game.id}  [{score.total_score}/100, {reasoning.confidence}]"]
    lines.append(f"    {reasoning.primary}")
    for phrase in reasoning.secondary:
        lines.append(f"    - {phrase}")
    return "\n".join(lines)


def run_recommend(args: argparse.Namespace, config: Config, service: RecommendationService) -> int:
    ctx = UserContext.from_raw(mood=args.mood, time=args.time, genre=args.genre, tables=service.tables)
    if args.mood and ctx.mood is None:
        logger.warning(f"Unrecognised mood {args.mood!r}; ranking with a neutral mood")

    limit = args.limit if args.limit is not None else config.recommendation_limit
    if limit <= 0:
        logger.error(f"--limit must be positive, got {limit}")
        return EXIT_USAGE

    summary = RunSummary("Recommend", logger)
    raw_games = load_library(args.library)
    games = service.build_records(raw_games)
    summary.add("games_loaded", len(games))
    summary.add("records_skipped", len(raw_games) - len(games))

    recommendations = service.top_recommendations(games, ctx, limit=limit)
    summary.add("recommendations", len(recommendations))
    summary.add("cache_hit_rate", float(service.cache.stats()["hit_rate"]))
    summary.log(logging.DEBUG)

    if args.json:
        _write(json.dumps([rec.to_dict() for rec in recommendations], indent=2, ensure_ascii=False))
    else:
        for rank, rec in enumerate(recommendations, start=1):
            _write(_format_recommendation(rank, rec))
    return EXIT_OK


def run_browse(args: argparse.Namespace, service: RecommendationService) -> int:
    if normalize_master_mood(args.master_mood) is None:
        logger.warning(f"Unknown master mood {args.master_mood!r}; matching mood ids literally")

    games = service.build_records(load_library(args.library))
    matches = service.browse(games, args.master_mood, title=args.search)
    logger.info(f"{len(matches)} of {len(games)} games match {args.master_mood!r}: "
                f"{truncate_list([g.title for g in matches])}")

    if args.json:
        _write(json.dumps([record_to_dict(game) for game in matches], indent=2, ensure_ascii=False))
    else:
        for game in matches:
            _write(game.title or game.id)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = Config(args.config) if args.config else Config(None)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as exc:
        configure_logging(level=resolve_log_level(args), log_file=args.log_file)
        logger.error(f"Could not load configuration: {exc}")
        return EXIT_USAGE

    configure_logging(
        level=resolve_log_level(args, default=config.log_level),
        log_file=args.log_file or config.log_file,
        run_id=uuid.uuid4().hex[:8],
    )

    try:
        service = RecommendationService.from_config(config)
        if args.command == "recommend":
            return run_recommend(args, config, service)
        return run_browse(args, service)
    except FileNotFoundError as exc:
        logger.error(str(exc))
        return EXIT_USAGE
    except (ValueError, yaml.YAMLError) as exc:
        logger.error(f"{args.command} failed: {exc}")
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
