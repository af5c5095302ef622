"""Print the most common ages of a folder of region files (one age per line)."""

import argparse
import os.path

from rich.console import Console

from agecensus.census import Census
from agecensus.config import DEFAULT_TOP_TIERS, CensusConfig, default_parallelism
from agecensus.io import get_datafolder, open_file
from agecensus.sources import DEFAULT_EXTENSION, folder_factory, list_regions
from agecensus.utils.logging import logger


parser = argparse.ArgumentParser("Print the most common ages across one or more regions.")

parser.add_argument(
    "path", type=str, nargs="?", help="Path to the regions folder. Defaults to current directory.", default=os.getcwd()
)
parser.add_argument(
    "regions",
    type=str,
    nargs="*",
    help="Regions to include. Defaults to every region file in the folder.",
)
parser.add_argument(
    "-e", "--extension", type=str, help="Extension of the region files.", default=DEFAULT_EXTENSION
)
parser.add_argument(
    "-p",
    "--parallelism",
    type=int,
    help="How many regions to scan simultaneously. Defaults to the number of cores.",
    default=default_parallelism(),
)
parser.add_argument(
    "-k", "--top-tiers", type=int, help="How many distinct counts to rank.", default=DEFAULT_TOP_TIERS
)
parser.add_argument("-b", "--backend", choices=["thread", "process"], help="Pool backend.", default="thread")
parser.add_argument("--progress", action="store_true", help="Show a progress bar over regions.")
parser.add_argument("--stats", type=str, help="Save the scan stats as json to this location.", default=None)

console = Console()


def main(argv=None):
    args = parser.parse_args(argv)
    data_folder = get_datafolder(args.path)
    regions = args.regions or list_regions(data_folder, args.extension)
    if not regions:
        console.log(f"[red]No {args.extension} region files found in {data_folder.path}")
        return 1

    try:
        config = CensusConfig(
            parallelism=args.parallelism, top_tiers=args.top_tiers, backend=args.backend, progress=args.progress
        )
    except ValueError as e:
        parser.error(str(e))
    census = Census(folder_factory(data_folder, args.extension), config)
    result = census.count_regions(regions)
    for entry in result.ranked(config.top_tiers):
        console.print(entry.format(), highlight=False)

    if args.stats:
        with open_file(args.stats, mode="wt") as f:
            result.stats.save_to_disk(f)
        logger.info(f"Stats saved to {args.stats}.")
    logger.success(f"Ranked {len(result.table)} distinct ages across {len(regions)} regions.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
