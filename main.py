import argparse
import logging
import sys

import ee

from lst_ndvi.constants import Default_End_Date, Default_N_Years, Default_Start_Date, Default_Year
from lst_ndvi.pipeline import TASKS, run_task
from lst_ndvi.region import get_city_coordinates, load_region, region_from_city
from lst_ndvi.settings import EXPORT_BUCKET, EXPORT_FOLDER, ROI_ASSET, configure_logging, initialize_earth_engine

logger = logging.getLogger("lst_ndvi")


def build_parser():
    parser = argparse.ArgumentParser(description="Chart and download MODIS LST and NDVI for a region.")
    parser.add_argument("-r", "--roi", help="Feature collection asset with the region boundary.", default=ROI_ASSET)
    parser.add_argument(
        "-c", "--city", help="Use the administrative boundary of a city instead, ex: 'Detroit, Michigan'."
    )
    parser.add_argument("-s", "--start", help="Start date, ex: 2018-04-01.", default=Default_Start_Date)
    parser.add_argument("-e", "--end", help="End date, ex: 2021-09-30.", default=Default_End_Date)
    parser.add_argument("-y", "--year", type=int, help="First year of the monthly composite.", default=Default_Year)
    parser.add_argument(
        "-n", "--n-years", type=int, help="Number of years in the monthly composite.", default=Default_N_Years
    )
    parser.add_argument("-t", "--task", choices=TASKS, help="What to produce.", default="Map")
    parser.add_argument("-f", "--folder", help="Google Drive folder for exports.", default=EXPORT_FOLDER)
    parser.add_argument("-b", "--bucket", help="Export to this Cloud Storage bucket instead.", default=EXPORT_BUCKET)
    parser.add_argument("-w", "--wait", action="store_true", help="Wait until the export task finishes.")
    parser.add_argument("-o", "--output-dir", help="Where maps and charts are written.", default=".")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging()
    initialize_earth_engine()

    try:
        if args.city:
            roi = region_from_city(get_city_coordinates(args.city))
        else:
            roi = load_region(args.roi)

        result = run_task(
            args.task,
            roi,
            args.start,
            args.end,
            args.year,
            args.n_years,
            args.folder,
            bucket=args.bucket,
            wait=args.wait,
            output_dir=args.output_dir,
        )
    except (ee.EEException, RuntimeError, ValueError) as e:
        logger.error("%s failed: %s", args.task, e)
        return 1

    print(f"{args.task} done: {result}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
