import argparse
import logging
import sys

from src.adapters.clock import SystemClock
from src.adapters.supabase import SupabaseContentRepo, build_client
from src.api.deps import Settings, get_settings
from src.components.content import PromoteDueInput, run_promote_due
from src.rules.loader import load_rules

logger = logging.getLogger("cli")


def handle_serve(settings: Settings, args: argparse.Namespace) -> None:
    import uvicorn

    uvicorn.run(
        "src.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


def handle_publish_due(settings: Settings, args: argparse.Namespace) -> int:
    """Promote every scheduled item whose time has come."""
    if not settings.supabase_url or not settings.supabase_service_key:
        logger.error("SUPABASE_URL and SUPABASE_SERVICE_KEY are required for publish_due.")
        return 1

    # The sweep touches every user's rows, so it runs with the service key
    client = build_client(settings.supabase_url, settings.supabase_service_key)
    result = run_promote_due(
        PromoteDueInput(type_id=args.type_id),
        repo=SupabaseContentRepo(client),
        time=SystemClock(),
    )
    if not result.success:
        for err in result.errors:
            logger.error("publish_due failed: %s", err.message)
        return 1

    print(f"Published {len(result.promoted)} items.")
    if result.failed:
        logger.warning("Could not publish %d items: %s", len(result.failed), result.failed)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Blog CMS API CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--reload", action="store_true")

    # publish_due
    publish_parser = subparsers.add_parser("publish_due", help="Publish due scheduled items")
    publish_parser.add_argument("--type-id", dest="type_id", help="Only this content type")

    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    try:
        load_rules(settings.rules_path)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Rules load failed: %s", e)
        return 1

    if args.command == "serve":
        handle_serve(settings, args)
        return 0
    return handle_publish_due(settings, args)


if __name__ == "__main__":
    sys.exit(main())
