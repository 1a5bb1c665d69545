"""Entry point: python -m bpmn_manager.dashboard [BASE_URL]"""

import argparse
import logging
import sys

from ..config import (
    DEFAULT_BASE_URL,
    get_auth_token,
    get_base_url,
    get_log_path,
    load_decision_fields,
    setup_encoding,
)
from .app import BPMNManagerApp


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="bpmn-manager",
        description="Terminal dashboard for a BPMN workflow-engine API",
    )
    parser.add_argument(
        "base_url",
        nargs="?",
        default=None,
        help=f"API base URL (default: $BPMN_MANAGER_URL or {DEFAULT_BASE_URL})",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    log_path = get_log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(log_path),
        level=logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger = logging.getLogger("bpmn_manager")

    setup_encoding()
    base_url = get_base_url(args.base_url)
    print(f"Starting BPMN Manager with API: {base_url}")
    try:
        app = BPMNManagerApp(
            base_url,
            auth_token=get_auth_token(),
            decision_fields=load_decision_fields(),
        )
        app.run()
    except Exception as exc:
        logger.exception("Dashboard crashed")
        print(f"Error running application: {exc}", file=sys.stderr)
        return 1
    return app.return_code or 0


if __name__ == "__main__":
    sys.exit(main())
