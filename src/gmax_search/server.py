"""G-Maxing Search MCP Server - catalogue search tools exposed over MCP."""

import argparse
import logging
from functools import partial

from fastmcp import FastMCP

from gmax_search import __version__
from gmax_search.config import get_search_config
from gmax_search.search import FuzzySearchEngine
from gmax_search.search.seed import load_seed_items
from gmax_search.tools import (
    autocomplete,
    manage_index,
    search_catalogue,
    search_stats,
)

logger = logging.getLogger("gmax-search.server")


def create_engine() -> FuzzySearchEngine:
    """Composition root: the one engine instance shared by every tool."""
    return FuzzySearchEngine(config=get_search_config())


mcp = FastMCP(
    "G-Maxing Search",
    instructions=(
        "Fuzzy search over the G-Maxing catalogue (methodology, training protocols, "
        "nutrition, coaching services, blog and testimonials). "
        "Provides typo-tolerant search with suggestions, autocomplete, "
        "query analytics and catalogue management."
    ),
)

engine = create_engine()

# Register search tools
search_catalogue.register(mcp, engine)
autocomplete.register(mcp, engine)

# Register analytics and index tools
search_stats.register(mcp, engine)
manage_index.register(mcp, engine)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gmax-search",
        description="Serve fuzzy search over the G-Maxing catalogue as MCP tools",
    )
    parser.add_argument("--version", "-v", action="version", version=f"gmax-search {__version__}")
    parser.add_argument("--transport", choices=["stdio", "http", "sse"], default="stdio",
                        help="MCP transport (default: %(default)s)")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address for http/sse (default: %(default)s)")
    parser.add_argument("--port", type=int, default=8000, help="Bind port for http/sse (default: %(default)s)")
    parser.add_argument("--seed", metavar="JSON", default=None,
                        help="Catalogue file replacing the bundled seed items")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Log level for gmax-search loggers (default: %(default)s)")
    return parser


def main():
    """Entry point for the gmax-search console script."""
    args = _build_parser().parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.seed:
        engine.item_loader = partial(load_seed_items, args.seed)
        engine.rebuild()
        logger.info("Loaded catalogue from %s", args.seed)

    run_kwargs: dict = {"transport": args.transport, "show_banner": False}
    if args.transport in ("http", "sse"):
        run_kwargs["host"] = args.host
        run_kwargs["port"] = args.port

    # Suppress noisy uvicorn shutdown messages
    logging.getLogger("uvicorn.error").setLevel(logging.CRITICAL)

    try:
        mcp.run(**run_kwargs)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
