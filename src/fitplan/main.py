"""
fitplan entry point.

This file handles startup concerns (arg-parsing, logging, required credentials), builds the shared
agent client and launches the HTTP server.
"""

import argparse
import logging
import sys

from fitplan.agent.client import (
    AgentClient,
    create_agent_context,
)
from fitplan.agent.providers import (
    get_provider_class,
    load_provider,
)
from fitplan.api.app import (
    create_app,
    run_api,
)
from fitplan.config import (
    get_required_env,
    settings,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _init_logging(level: str) -> None:
    numeric = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        stream=sys.stdout,
    )
    # SDK clients log every request through httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)


def build_agent(provider_name: str) -> AgentClient:
    """Create the process-wide agent client, exiting if the provider credential is missing."""
    provider_cls = get_provider_class(provider_name)
    api_key = get_required_env(provider_cls.API_KEY_ENV)

    context = create_agent_context(settings.WORKING_DIR)
    logger.info("Agent context created in %s", context.working_directory)

    agent = AgentClient(context, load_provider(provider_name, api_key))
    logger.info("Agent created (provider=%s)", provider_name)
    return agent


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
def main(argv: list[str] | None = None) -> None:
    """
    Main entry point for the fitplan server.

    Parses the command line, initializes logging, requires the model credential and serves the
    plan API with the static front-end until interrupted.
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = argparse.ArgumentParser(description="Run the fitplan workout plan server")
    parser.add_argument(
        "--host",
        default=settings.API_HOST,
        help="Bind address (default from env: %(default)s)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.API_PORT,
        help="Bind port (default from env: %(default)s)",
    )
    parser.add_argument(
        "--provider",
        choices=["anthropic", "openai"],
        type=str.lower,
        default=settings.MODEL_PROVIDER,
        help="Model provider (default from env: %(default)s)",
    )
    parser.add_argument(
        "--public-dir",
        default=settings.PUBLIC_DIR,
        help="Directory served as the front-end (default from env: %(default)s)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        type=str.lower,
        default=settings.LOG_LEVEL,
        help="Logging level (default from env: %(default)s)",
    )
    args = parser.parse_args(argv)

    # Override log level setting with command-line argument
    settings.LOG_LEVEL = args.log_level

    _init_logging(settings.LOG_LEVEL)

    logger.info("Starting fitplan server")

    agent = build_agent(args.provider)
    model = settings.AGENT_MODEL or agent.provider.DEFAULT_MODEL

    app = create_app(agent, model=model, public_root=args.public_dir)
    run_api(app, host=args.host, port=args.port, log_level=settings.LOG_LEVEL)


if __name__ == "__main__":
    main()
