"""
Main entry point for the Student Grading System.
"""

import argparse
import logging
import random
import sys
from typing import Callable, List, Optional

from .config import GradingConfig, load_config
from .console import ConsoleApp, render_record, render_student_list
from .core.exceptions import GradingError
from .core.interfaces import RecordStore
from .logging_setup import configure_logging
from .persistence import InMemoryRecordStore, JsonRecordStore
from .services import CsvExporter, Registry

logger = logging.getLogger(__name__)

SAMPLE_STUDENTS = [
    ("Jane Doe", [
        {"CS101": 85, "CS102": 92, "CS103": 78, "CS104": 88, "CS105": 90, "CS106": 87},
        {"CS101": 30, "CS102": 92, "CS103": 78, "CS104": 88, "CS105": 90, "CS106": 87},
    ]),
    ("John Smith", [
        {"CS101": 55, "CS102": 61, "CS103": 47, "CS104": 70, "CS105": 66, "CS106": 58},
    ]),
    ("Amara Okafor", []),
]


class GradingApplication:
    """
    Composition root: builds the store, registry and exporter from config.

    A store passed in replaces the JSON data file named by the config.
    """

    def __init__(self, config: Optional[GradingConfig] = None,
                 rng: Optional[random.Random] = None,
                 store: Optional[RecordStore] = None):
        self._config = config or GradingConfig()
        self._store = store if store is not None else JsonRecordStore(self._config.data_file)
        self._registry = Registry(
            self._store,
            rng=rng,
            max_number_attempts=self._config.max_number_attempts
        )
        self._exporter = CsvExporter(self._config.export_dir)
        logger.info("Grading system initialized with %s", type(self._store).__name__)

    @property
    def config(self) -> GradingConfig:
        return self._config

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def exporter(self) -> CsvExporter:
        return self._exporter

    def console(self, input_fn: Callable[[str], str] = input,
                output_fn: Callable[[str], None] = print) -> ConsoleApp:
        return ConsoleApp(self._registry, self._exporter, input_fn, output_fn)

    def create_sample_data(self) -> List[str]:
        """Create sample students with mark history; returns their numbers."""
        numbers = []
        for name, attempts in SAMPLE_STUDENTS:
            student_number = self._registry.create_new_record(name)
            for marks in attempts:
                self._registry.enter_marks(student_number, marks)
            numbers.append(student_number)
        return numbers

    def run_demo(self, output_fn: Callable[[str], None] = print) -> None:
        """Seed sample data and print records and statistics."""
        numbers = self.create_sample_data()

        output_fn("=== Students ===")
        output_fn(render_student_list(self._registry.list_students()))
        for number in numbers:
            output_fn(render_record(self._registry.get_student(number)))

        stats = self._registry.get_statistics()
        output_fn("\n=== System Statistics ===")
        output_fn(f"Total Students: {stats.student_count}")
        output_fn(f"Average Pass Rate: {stats.average_pass_rate:.2f}%")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Student Grading System")
    parser.add_argument("--config", type=str, help="Configuration file path (JSON)")
    parser.add_argument("--data-file", type=str, help="Student data file path")
    parser.add_argument("--export-dir", type=str, help="Directory for CSV exports")
    parser.add_argument("--log-level", type=str, help="Logging level (DEBUG, INFO, WARNING, ...)")
    parser.add_argument("--demo", action="store_true", help="Print sample data from a scratch in-memory registry")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config, overrides={
            "data_file": args.data_file,
            "export_dir": args.export_dir,
            "log_level": args.log_level,
        })
        configure_logging(config.log_level, config.log_file)
        # Sample data never touches the configured data file
        store = InMemoryRecordStore() if args.demo else None
        application = GradingApplication(config, store=store)
    except GradingError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    try:
        if args.demo:
            application.run_demo()
        else:
            application.console().run()
    except GradingError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
