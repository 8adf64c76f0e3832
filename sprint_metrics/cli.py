import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from .calculator import run_calculators
from .common_constants import SPRINTS_FILE_ENV, TASKS_FILE_ENV
from .config import ConfigError, config_to_options
from .config_main import CALCULATORS
from .exceptions import SnapshotError
from .snapshot import load_snapshot
from .utils import set_chart_context

load_dotenv()

logger = logging.getLogger(__name__)


def configure_argument_parser():
    """Configure an ArgumentParser that manages command line options."""

    parser = argparse.ArgumentParser(
        description=(
            "Calculate sprint velocity, bug ratio, workload, trend and ranking "
            "reports from sprint and task data."
        )
    )

    # Basic options
    parser.add_argument("config", metavar="config.yml", nargs="?", help="Configuration file")
    parser.add_argument("-v", dest="verbose", action="store_true", help="Verbose output")
    parser.add_argument(
        "-vv",
        dest="very_verbose",
        action="store_true",
        help="Even more verbose output",
    )

    # Output directory
    parser.add_argument(
        "--output-directory",
        "-o",
        metavar="metrics",
        help=("Write output files to this directory, rather than the current working directory."),
    )

    # Data sources
    parser.add_argument(
        "--sprints",
        metavar="sprints.csv",
        help="Sprints data file (CSV, JSON or Excel)",
    )
    parser.add_argument(
        "--tasks",
        metavar="tasks.csv",
        help="Tasks data file (CSV, JSON or Excel)",
    )

    return parser


def main():
    parser = configure_argument_parser()
    args = parser.parse_args()

    sys.exit(run_command_line(parser, args))


def run_command_line(parser, args):
    """Run the reports described by `args`. Returns the process exit status."""
    if not args.config:
        parser.print_usage()
        return 0

    logging.basicConfig(
        format="[%(asctime)s %(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        level=(
            logging.DEBUG
            if args.very_verbose
            else logging.INFO if args.verbose else logging.WARNING
        ),
    )

    # Configuration and settings
    # (command line arguments override config file options)

    logger.debug("Parsing options from %s", args.config)
    try:
        with open(args.config, encoding="utf-8") as config:
            options = config_to_options(
                config.read(), cwd=os.path.dirname(os.path.abspath(args.config))
            )
    except FileNotFoundError:
        logger.error(
            "Configuration file '%s' not found. Please provide a valid config file.",
            args.config,
        )
        return 1
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    # Allow command line arguments to override options
    override_options(options["data"], args)

    try:
        sprints_file, tasks_file = get_data_files(options["data"])
        # Data paths are resolved before changing into the output directory
        sprints_file = os.path.abspath(sprints_file)
        tasks_file = os.path.abspath(tasks_file)
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    # Set charting context, which determines how charts are rendered
    set_chart_context("paper")

    # Set output directory if required
    output_dir = None
    if "output_directory" in options:
        output_dir = options["output_directory"]
    if args.output_directory:
        output_dir = args.output_directory
    if output_dir:
        logger.info("Changing working directory to %s", output_dir)
        os.makedirs(output_dir, exist_ok=True)
        os.chdir(output_dir)

    try:
        snapshot = load_snapshot(sprints_file, tasks_file)
    except SnapshotError as e:
        logger.error("Could not load sprint and task data: %s", e)
        return 1

    logger.info("Running calculators")
    run_calculators(CALCULATORS, snapshot, options["settings"])
    return 0


def override_options(options, arguments):
    """Update `options` dict with settings from `arguments`
    with the same key.
    """
    for key in options.keys():
        if getattr(arguments, key, None) is not None:
            options[key] = getattr(arguments, key)


def get_data_files(data_options):
    """Return the (sprints, tasks) file names, falling back to the
    environment when the configuration does not name them.
    """
    sprints_file = data_options["sprints"] or os.environ.get(SPRINTS_FILE_ENV)
    tasks_file = data_options["tasks"] or os.environ.get(TASKS_FILE_ENV)

    if not sprints_file:
        raise ConfigError(
            f"No sprints file given. Set `Sprints` in the `Data` section, "
            f"pass --sprints or set {SPRINTS_FILE_ENV}."
        )
    if not tasks_file:
        raise ConfigError(
            f"No tasks file given. Set `Tasks` in the `Data` section, "
            f"pass --tasks or set {TASKS_FILE_ENV}."
        )

    return sprints_file, tasks_file


if __name__ == "__main__":
    main()
