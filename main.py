"""
Voter Registry Lookup: CLI Entry Point

Usage:
  # Serve the JSON API (uvicorn)
  python main.py serve --port 5000

  # Run one search from the terminal
  python main.py search --first-name Գրիգոր --last-name Գրիգորյան
"""

import asyncio
import argparse
import logging
import sys
from dotenv import load_dotenv
load_dotenv()

from voterlookup.domain.errors import RegistryError
from voterlookup.domain.entities.search_params import DEFAULT_REGION, SearchParams


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("voterlookup")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Voter Registry Lookup: search the public voter register"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Run the JSON API server")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    serve_parser.add_argument(
        "--port", type=int, default=None, help="Port (default: PORT env or 5000)"
    )

    # search command
    search_parser = subparsers.add_parser("search", help="Run one registry search")
    search_parser.add_argument("--first-name", required=True)
    search_parser.add_argument("--last-name", required=True)
    search_parser.add_argument("--middle-name", default="")
    search_parser.add_argument("--birth-date", default="", help="DD/MM/YYYY")
    search_parser.add_argument("--region", default=DEFAULT_REGION)
    search_parser.add_argument("--community", default="")
    search_parser.add_argument("--street", default="")
    search_parser.add_argument("--building", default="")
    search_parser.add_argument("--apartment", default="")
    search_parser.add_argument("--district", default="")

    return parser.parse_args(argv)


def params_from_args(args) -> SearchParams:
    return SearchParams(
        first_name=args.first_name,
        last_name=args.last_name,
        middle_name=args.middle_name,
        birth_date=args.birth_date,
        region=args.region,
        community=args.community,
        street=args.street,
        building=args.building,
        apartment=args.apartment,
        district=args.district,
    )


async def run_search(params: SearchParams) -> int:
    from voterlookup.infrastructure.config import Config
    from voterlookup.infrastructure.container import Container

    container = Container(Config.from_env())

    try:
        response = await container.search_use_case.execute(params)
    except RegistryError as e:
        logger.error(f"Search failed: {e}")
        return 1

    print("\n" + "=" * 70)
    print(f"  {response.count} results | pages: {response.pages_fetched} | stop: {response.stop_reason.value}")
    if response.is_partial:
        print(f"  PARTIAL: {response.truncated_by}")
    print("=" * 70)
    for i, row in enumerate(response.results, 1):
        print(f"{i:>3}. {row.name}")
        print(f"     {row.birth_date} | {row.region_community}")
        print(f"     {row.address} | {row.district}")
    print("=" * 70 + "\n")
    return 0


def serve(host: str, port=None) -> None:
    import uvicorn
    from voterlookup.infrastructure.config import Config

    config = Config.from_env()
    port = port or config.port
    logger.info(f"Starting API on http://{host}:{port} (env={config.app_env})")
    uvicorn.run("main_api:app", host=host, port=port, log_level=config.log_level.lower())


def main(argv=None) -> int:
    args = parse_args(argv)

    if args.command == "serve":
        serve(args.host, args.port)
        return 0

    if args.command == "search":
        return asyncio.run(run_search(params_from_args(args)))

    return 1


if __name__ == "__main__":
    sys.exit(main())
