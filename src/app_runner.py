import sys
import signal
import argparse
import logging
from pathlib import Path
from typing import Optional, List, NoReturn

from src.utils.config import Config
from src.utils.colors import Colors
from src.utils.exceptions import RiskAssessmentError
from src.utils.validators import check_default_settings

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


class AppRunner:
    """Encapsulates startup, configuration checks and execution of a risk assessment."""

    def __init__(self, args: Optional[List[str]] = None) -> None:
        """
        Initialize the runner with CLI arguments.

        Args:
            args: Command line arguments including the program name
                  (defaults to sys.argv)
        """
        self.args = args if args is not None else sys.argv
        self.options = self.build_parser().parse_args(self.args[1:])
        self.config_file = self.options.env

    @staticmethod
    def build_parser() -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="uav-risk",
            description="Compute a flight safety score from expert criterion assessments",
        )
        parser.add_argument("assessment", nargs="?",
                            help="JSON assessment file (omit with --defaults)")
        parser.add_argument("--env", default=".env",
                            help="Environment file with settings (default: .env)")
        parser.add_argument("--scenario", type=str.upper, choices=["S1", "S2", "S3", "S4"],
                            help="Aggregation scenario, overrides the file and config")
        parser.add_argument("--threat", type=str.upper, choices=["C1", "C2", "C3", "C4", "C5"],
                            help="Threat level, overrides the file and config")
        parser.add_argument("--defaults", action="store_true",
                            help="Evaluate the default form values instead of a file")
        return parser

    def run(self) -> int:
        """Execute the main application flow and return the exit code."""
        self.setup_signal_handlers()
        self.print_banner()

        if not self.options.assessment and not self.options.defaults:
            print(Colors.error("Error: no assessment file given (use --defaults to evaluate form defaults)"))
            return EXIT_ERROR

        try:
            config = Config(self.config_file)
            self.warn_on_default_settings(config)
            self.start_pipeline(config)
        except KeyboardInterrupt:
            print("Interrupted")
            return EXIT_INTERRUPTED
        except RiskAssessmentError as e:
            logging.getLogger("AppRunner").error(f"Assessment failed: {e}")
            print(Colors.error(f"❌ {e}"))
            return EXIT_ERROR

        return EXIT_OK

    def setup_signal_handlers(self) -> None:
        """Register handlers for graceful shutdown."""
        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

    @staticmethod
    def _signal_handler(signum, frame) -> NoReturn:
        """Handle shutdown signals."""
        print("\nReceived shutdown signal, stopping...")
        raise KeyboardInterrupt

    def print_banner(self) -> None:
        """Print the application startup banner."""
        print(Colors.colorize("=" * 80, Colors.CYAN))
        print(Colors.colorize("UAV Flight Risk Assessment", Colors.BOLD + Colors.CYAN))
        print(Colors.colorize("Fuzzy evaluation of expert judgments on seven risk criteria", Colors.GREY))
        print(Colors.colorize("=" * 80, Colors.CYAN))
        print()

    def warn_on_default_settings(self, config: Config) -> None:
        """Warn about placeholder values copied from .env.example."""
        if not Path(self.config_file).exists():
            print(Colors.colorize(
                f"No '{self.config_file}' found; using built-in defaults.", Colors.GREY
            ))
            return

        for warning in check_default_settings(config):
            print(f"  • {Colors.warning(warning)}")

    def start_pipeline(self, config: Optional[Config] = None) -> None:
        """Instantiate and run the main pipeline."""
        from src.main import RiskAssessmentPipeline
        pipeline = RiskAssessmentPipeline(self.config_file, config=config)
        pipeline.run(
            self.options.assessment,
            scenario=self.options.scenario,
            threat_level=self.options.threat,
        )
