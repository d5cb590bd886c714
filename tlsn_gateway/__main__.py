"""Run the verification gateway HTTP server."""

import argparse
import logging

import uvicorn

from .config import GatewayConfig
from .web.app import create_app

logger = logging.getLogger("tlsn_gateway")


def main(argv=None) -> int:
    config = GatewayConfig.from_env()

    parser = argparse.ArgumentParser(prog="tlsn-gateway", description="TLS notary proof verification gateway")
    parser.add_argument("--host", default=config.host)
    parser.add_argument("--port", type=int, default=config.port)
    parser.add_argument("--log-level", default=config.log_level)
    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(config)
    logger.info(f"Verifier service listening on {args.host}:{args.port}")
    uvicorn.run(app, host=args.host, port=args.port, log_level=str(args.log_level).lower())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
