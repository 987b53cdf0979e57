import argparse
import sys
from pathlib import Path

from skytap_publish_url.context import BuildContext
from skytap_publish_url.logging_config import setup_logging
from skytap_publish_url.steps.list_published_url import ListPublishedUrlStep


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="skytap-publish-url",
        description="Save the desktops URL of a Skytap publish set to a file",
    )
    p.add_argument("--configuration-id", type=str, default="", help="Skytap configuration ID")
    p.add_argument(
        "--configuration-file",
        type=str,
        default="",
        help="JSON file with an 'id' field (alternative to --configuration-id)",
    )
    p.add_argument("--url-name", required=True, type=str, help="Publish set name")
    p.add_argument("--url-file", required=True, type=str, help="File to save the URL to")
    p.add_argument("--workspace", type=str, help="Directory relative file names resolve against")
    p.add_argument("--base-url", type=str, help="Skytap API host (or set SKYTAP_BASE_URL)")
    p.add_argument("--log-level", type=str, help="Log level (or set SKYTAP_LOG_LEVEL)")
    p.add_argument("--log-dir", type=str, help="Also write rotating log files here")
    p.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(
        level=args.log_level,
        log_dir=args.log_dir,
        json_format=True if args.json_logs else None,
    )

    step = ListPublishedUrlStep(
        url_name=args.url_name,
        url_file=args.url_file,
        configuration_id=args.configuration_id,
        configuration_file=args.configuration_file,
    )
    build_ctx = BuildContext.from_environment(
        Path(args.workspace) if args.workspace else None
    )

    ok = step.execute(build_ctx, base_url=args.base_url)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
