"""Server entry point: python -m motorschema [--config motorschema.yaml]"""

from __future__ import annotations

import argparse

import uvicorn

from motorschema.app import create_app
from motorschema.config import MotorSchemaConfig
from motorschema.observability.logging import setup_logging


def main() -> None:
    parser = argparse.ArgumentParser(prog="motorschema", description="Wiring schema rendering service")
    parser.add_argument("--config", default="motorschema.yaml", help="YAML config file")
    parser.add_argument("--host", default=None, help="Override bind host")
    parser.add_argument("--port", type=int, default=None, help="Override bind port")
    args = parser.parse_args()

    config = MotorSchemaConfig.from_yaml(args.config)
    if args.host:
        config.host = args.host
    if args.port:
        config.port = args.port
    setup_logging(config.log_level)

    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
