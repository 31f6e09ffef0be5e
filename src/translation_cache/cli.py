import argparse
import asyncio
import logging
from typing import Optional, Sequence

from dotenv import load_dotenv

from translation_cache.cache import CacheManager, TranslationCacheEngine
from translation_cache.config import CacheConfig
from translation_cache.service_types import ServiceType

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _format_error(exc: Exception) -> str:
    return f"{type(exc).__name__}: {exc}"


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="translation-cache",
        description="Inspect and maintain the local translation cache file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  translation-cache stats
  translation-cache clear-expired
  translation-cache preheat
  translation-cache lookup "Hello" --source en --target zh --service qianwen
  translation-cache --cache-file ./cache.json clear
        """,
    )
    parser.add_argument(
        "--cache-file",
        help="Cache file path (default: TRANSLATION_CACHE_FILE or the user data directory)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("stats", help="Show cache statistics")
    subparsers.add_parser("clear", help="Remove every cached translation")
    subparsers.add_parser("clear-expired", help="Remove expired translations")
    subparsers.add_parser("preheat", help="Seed the cache with common phrases")

    lookup = subparsers.add_parser("lookup", help="Look up a cached translation")
    lookup.add_argument("text", help="Original text")
    lookup.add_argument("--source", required=True, help="Source language code (e.g., en)")
    lookup.add_argument("--target", required=True, help="Target language code (e.g., zh)")
    lookup.add_argument(
        "--service",
        choices=[member.value for member in ServiceType],
        default=ServiceType.QIANWEN.value,
        help="Translation service the result came from (default: qianwen)",
    )

    return parser.parse_args(argv)


async def run_command(args: argparse.Namespace, engine: TranslationCacheEngine) -> int:
    """Run one command against a started engine. Returns the process exit code."""
    if args.command == "stats":
        await CacheManager(engine).print_stats()
    elif args.command == "clear":
        await engine.clear()
        logger.info("event=cache_cleared")
    elif args.command == "clear-expired":
        removed = await engine.clear_expired()
        logger.info("event=cache_expired_cleared removed=%s", removed)
    elif args.command == "preheat":
        seeded = await engine.preheat()
        logger.info("event=cache_preheated count=%s", seeded)
    elif args.command == "lookup":
        translation = await engine.get(args.text, args.source, args.target, args.service)
        if translation is None:
            print("(not cached)")
            return 1
        print(translation)
    return 0


async def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    load_dotenv()
    args = parse_arguments(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    config = CacheConfig.from_env(cache_file=args.cache_file)
    logger.info(
        "event=cache_init cache_file=%s enabled=%s ttl_hours=%s",
        config.cache_file,
        config.enabled,
        config.ttl_hours,
    )

    try:
        async with TranslationCacheEngine(config) as engine:
            await engine.wait_loaded()
            return await run_command(args, engine)
    except Exception as exc:
        logger.error("event=run_failed command=%s error=%s", args.command, _format_error(exc))
        raise


def run() -> None:
    raise SystemExit(asyncio.run(main()))


if __name__ == "__main__":
    run()
