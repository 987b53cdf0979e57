#!/usr/bin/env python3
"""Basic usage example for the Skytap publish URL step.

This example demonstrates how to:
1. Configure credentials
2. Build the step from its four parameters
3. Run it against the Skytap API
4. Read back the saved URL
"""

import sys
from pathlib import Path
from skytap_publish_url import BuildContext, ListPublishedUrlStep, config
from skytap_publish_url.logging_config import setup_logging


def main():
    """Run basic example."""
    setup_logging(level="INFO")

    # 1. Credentials come from SKYTAP_USER / SKYTAP_API_KEY (or .env)
    if not (config.get_env(config.ENV_USER) and config.get_env(config.ENV_API_KEY)):
        print("Skytap credentials not configured")
        print("Set SKYTAP_USER and SKYTAP_API_KEY")
        return 1

    # 2. Step parameters
    configuration_id = sys.argv[1] if len(sys.argv) > 1 else "1453536"
    step = ListPublishedUrlStep(
        configuration_id=configuration_id,
        url_name="testpublish",
        url_file="published_url.txt",
    )

    # 3. Run it
    build_ctx = BuildContext.from_environment(Path.cwd())
    if not step.execute(build_ctx):
        print("Step failed, see log output above")
        return 1

    # 4. Show result
    print(f"Published URL: {(Path.cwd() / 'published_url.txt').read_text()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
