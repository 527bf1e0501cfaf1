from __future__ import annotations

import argparse
import asyncio
import json
import sys

from services.dashboard.app.db import create_engine
from services.dashboard.app.errors import SeedFailure
from services.dashboard.app.logging import configure_logging
from services.dashboard.app.seeder import run_seed
from services.dashboard.app.settings import SETTINGS


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create and populate the dashboard tables.")
    parser.add_argument("--database-url", default=SETTINGS.postgres_url, help="Defaults to $POSTGRES_URL.")
    parser.add_argument("--bcrypt-rounds", type=int, default=SETTINGS.bcrypt_rounds)
    args = parser.parse_args(argv)

    # Logs go to stderr so stdout carries only the result document.
    configure_logging(SETTINGS.log_level, stream=sys.stderr)
    out = asyncio.run(run_seed(args.database_url, engine_factory=create_engine, bcrypt_rounds=args.bcrypt_rounds))
    if isinstance(out, SeedFailure):
        err = {"message": out.message, "code": out.code}
        if out.details:
            err["details"] = out.details
        print(json.dumps({"error": err}, indent=2), file=sys.stderr)
        return 1
    print(json.dumps({"counts": out}, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
