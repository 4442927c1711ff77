import sys
import time
import logging
import signal
import argparse
import threading

from core.app_context import AppContext
from core.config_loader import load_config
from database.init_db import init_db

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Set by SIGINT/SIGTERM; regenerate --all stops before the next user
stop_event = threading.Event()


def signal_handler(sig, frame):
    logger.info("Shutdown signal received")
    stop_event.set()


def run_init_db(context: AppContext) -> int:
    init_db(context.engine)
    return 0


def run_regenerate_user(context: AppContext, user_id: str) -> int:
    result = context.regenerator.regenerate_for_user(user_id)
    if not result.profile_found:
        logger.warning(f"User {user_id} has no profile; nothing regenerated")
        return 0

    logger.info(
        f"User {user_id}: {result.qualifying} qualifying of {result.candidates_checked} candidates "
        f"(created={result.created}, updated={result.updated}, deleted={result.deleted}, "
        f"preserved={result.preserved})"
    )
    if result.failed_pairs:
        logger.warning(f"Skipped {len(result.failed_pairs)} pairs: {', '.join(result.failed_pairs)}")
    return 0


def run_regenerate_all(context: AppContext) -> int:
    cycle_start = time.time()
    logger.info("=" * 60)
    logger.info("STARTING FULL MATCH REGENERATION")
    logger.info("=" * 60)

    batch = context.regenerator.regenerate_all(stop_event=stop_event)

    for user_id, error in batch.failures.items():
        logger.error(f"  {user_id}: {error}")

    cycle_elapsed = time.time() - cycle_start
    logger.info(
        f"=== Regeneration finished in {cycle_elapsed:.2f}s: "
        f"{batch.users_processed}/{batch.users_total} users, "
        f"created={batch.created}, updated={batch.updated}, deleted={batch.deleted}, "
        f"skipped pairs={batch.failed_pairs} ==="
    )
    if batch.cancelled:
        logger.warning("Regeneration was stopped before every user was processed")
    return 0 if batch.success else 1


def run_server(context: AppContext) -> int:
    import uvicorn
    from web.backend.app import create_app

    app = create_app(context)
    uvicorn.run(app, host=context.config.web.host, port=context.config.web.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="StudyMatch match regeneration driver")
    parser.add_argument('--config', type=str, default='config.yaml',
                        help='Path to config.yaml (default: config.yaml)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('init-db', help='Create the user_profile and match_suggestion tables')

    regenerate = subparsers.add_parser('regenerate', help='Recompute stored match suggestions')
    target = regenerate.add_mutually_exclusive_group(required=True)
    target.add_argument('--user', type=str, help='Regenerate suggestions for one user id')
    target.add_argument('--all', action='store_true', help='Regenerate suggestions for every profile')

    subparsers.add_parser('serve', help='Run the matches HTTP API')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    config = load_config(args.config)
    context = AppContext.build(config)
    logger.info(f"Main driver starting: {args.command}")

    try:
        if args.command == 'init-db':
            return run_init_db(context)
        if args.command == 'regenerate':
            if args.all:
                return run_regenerate_all(context)
            return run_regenerate_user(context, args.user)
        return run_server(context)
    except Exception as e:
        logger.error(f"Command {args.command} failed: {e}", exc_info=True)
        return 1
    finally:
        context.dispose()


if __name__ == "__main__":
    sys.exit(main())
