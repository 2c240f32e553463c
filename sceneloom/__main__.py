import argparse
import logging
import sys

from .config import LOG_LEVELS, load_config
from .core.pipeline import explore_project
from .core.project import ProjectLayoutError


def setup_logging(log_level: str = "INFO") -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    """Main entry point for SceneLoom."""
    parser = argparse.ArgumentParser(
        description="SceneLoom - Unity scene hierarchy dumps and unused script report"
    )
    parser.add_argument("project_root", help="Unity project root (contains Assets/)")
    parser.add_argument("output_dir", help="Directory for scene dumps and UnusedScripts.csv")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Optional YAML config file"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of scene worker threads (default: CPU count)"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=list(LOG_LEVELS),
        help="Logging level"
    )
    args = parser.parse_args(argv)

    config = load_config(args.config)
    if args.workers is not None:
        config.max_workers = args.workers
    if args.log_level is not None:
        config.log_level = args.log_level

    setup_logging(config.log_level)
    logger.info(f"Starting SceneLoom - Project: {args.project_root}")

    try:
        summary = explore_project(args.project_root, args.output_dir, config)
    except ProjectLayoutError as e:
        print(str(e))
        return 1

    print(f"\n  Scene dumps written to: {args.output_dir}")
    print(f"  Unused scripts: {len(summary.unused)} ({summary.report_path})\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
