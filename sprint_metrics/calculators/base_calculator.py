"""Base calculator class with common functionality for Sprint Metrics.

This module provides a base calculator class with the file writing and
chart helpers shared by the report calculators.
"""

import logging

from ..calculator import Calculator
from ..utils import get_extension

logger = logging.getLogger(__name__)


class BaseCalculator(Calculator):
    """Base calculator class with common functionality."""

    #: Human readable report name, used for logging and Excel sheet names
    report_name = None

    #: Settings key holding the list of data files to write
    data_setting = None

    def write(self):
        data = self.get_result()
        if data is None:
            return

        output_files = None
        if self.data_setting:
            output_files = self.settings.get(self.data_setting)

        if output_files:
            self.write_data_files(data, output_files)
        else:
            logger.debug("No output file specified for %s data", self.report_name)

        self.write_charts(data)

    def write_charts(self, data):
        """Write any charts for this report. Most reports have none."""

    def write_data_files(self, data, output_files):
        """Write report data to each file, choosing the format by extension."""
        for output_file in output_files:
            output_extension = get_extension(output_file)

            logger.info("Writing %s data to %s", self.report_name, output_file)
            if output_extension == ".json":
                data.to_json(output_file, orient="records", date_format="iso")
            elif output_extension == ".xlsx":
                data.to_excel(
                    output_file, sheet_name=self.report_name.title()[:31], index=False
                )
            else:
                data.to_csv(output_file, header=True, index=False)

    def check_chart_data_empty(self, chart_data, chart_name):
        """Check if chart data is empty and log warning if so."""
        if chart_data is None:
            return True

        if len(chart_data.index) == 0:
            logger.warning("Cannot draw %s chart with zero items", chart_name)
            return True

        return False
