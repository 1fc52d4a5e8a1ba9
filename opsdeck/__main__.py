"""Run the OpsDeck demo dashboard."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from opsdeck.app import DashboardApp


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="opsdeck", description="OpsDeck demo dashboard")
    parser.add_argument("--settings", type=Path, default=None, help="YAML settings file")
    parser.add_argument("--log-file", type=Path, default=None, help="Write debug logs here")
    args = parser.parse_args(argv)

    if args.log_file is not None:
        logging.basicConfig(
            filename=args.log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    DashboardApp(settings_path=args.settings).run()


if __name__ == "__main__":
    main()
