"""Calculator framework for Sprint Metrics.

A calculator computes one report from the snapshot (`run()`) and writes any
configured output files (`write()`). Calculators run in order and can read
the results of calculators that ran before them.
"""

import logging

logger = logging.getLogger(__name__)


class Calculator:
    """Base class for calculators."""

    def __init__(self, snapshot, settings, results):
        """Initialise the calculator.

        Args:
            snapshot: A `Snapshot` of sprints and tasks
            settings: Dictionary of settings, see `config_to_options()`
            results: Dictionary of results, keyed by calculator class. Shared
                by all calculators in a run.
        """
        self.snapshot = snapshot
        self.settings = settings
        self.results = results

    def get_result(self, calculator=None, default=None):
        """Get the result of `calculator` (this calculator by default)."""
        return self.results.get(
            calculator if calculator is not None else self.__class__, default
        )

    def run(self):
        """Run the calculation and return its result."""
        raise NotImplementedError()

    def write(self):
        """Write output files for the result of `run()`, if configured."""
        raise NotImplementedError()


def run_calculators(calculators, snapshot, settings, write=True):
    """Run each calculator in `calculators` in order, then write the outputs.

    Returns a dictionary of results keyed by calculator class.
    """
    results = {}
    instances = []

    for c in calculators:
        instance = c(snapshot, settings, results)
        instances.append(instance)
        logger.info("%s running...", c.__name__)
        results[c] = instance.run()
        logger.info("%s completed", c.__name__)

    if write:
        for instance in instances:
            logger.info("Writing file for %s...", instance.__class__.__name__)
            instance.write()

    return results
