"""Manual smoke test for the collector.

Loads configuration from the environment, captures a message and an
exception, then drains the queue before exiting. Delivery failures are
printed through a stderr logger so a bad api key or endpoint is visible.

It is **not** part of the library; it is a convenient way to check a real
api key against the ingestion endpoint.
"""

from __future__ import annotations

import logging

from raygun import load_config, new_collector, with_custom_data, with_tags, with_user


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(threadName)s %(message)s")
    logger = logging.getLogger("raygun.smoke")

    config = load_config()
    collector = new_collector(config.raygun, logger=logger)

    collector.capture_message("raygun smoke test", with_tags(["smoke"]), with_user("smoke-test"))

    with collector.recover():
        {}["missing"]

    try:
        int("not a number")
    except ValueError as exc:
        collector.capture_error(exc, with_custom_data({"input": "not a number"}))

    collector.wait()
    logger.info("drained")


if __name__ == "__main__":
    main()
