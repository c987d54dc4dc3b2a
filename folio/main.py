"""Folio Signals — application entry point.

Boots the FastAPI internal server that exposes the signal and valuation
engine to the web client, and provides the CLI entry point.
"""

import logging

from fastapi import FastAPI

from folio.api.routers import router

app = FastAPI(title="Folio Signals Internal API", version="0.1.0")
app.include_router(router)

logger = logging.getLogger("folio")


@app.get("/health")
async def health():
    """Liveness probe."""
    return {"status": "ok"}


# ── CLI ──────────────────────────────────────────────────────────────────


def _run_cli() -> None:
    """Parse CLI arguments, load config and serve the API."""
    import argparse

    import uvicorn

    from folio.api.routers import configure_routers
    from folio.config import load_config

    parser = argparse.ArgumentParser(description="Folio Signals internal API")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: API_PORT or 8080)",
    )
    parser.add_argument("--env-file", default=None, help="Path to a .env file")
    args = parser.parse_args()

    config = load_config(args.env_file)

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    configure_routers(config)
    port = args.port if args.port is not None else config.api_port

    logger.info(
        "Starting Folio Signals API on %s:%d (reporting currency %s, "
        "stale after %d/%d days)",
        args.host, port, config.reporting_currency.value,
        config.recommendation_stale_days, config.holding_stale_days,
    )
    uvicorn.run(app, host=args.host, port=port, log_level=config.log_level.lower())


if __name__ == "__main__":
    _run_cli()
