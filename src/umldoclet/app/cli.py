"""Command-line interface for umldoclet."""

import argparse


def _add_link_options(parser: argparse.ArgumentParser) -> None:
    """Add external documentation link options."""
    group = parser.add_argument_group("External links", "Cross-references to types documented elsewhere")
    group.add_argument(
        "--link",
        action="append",
        default=[],
        metavar="URI",
        help="Online documentation root; its package list is read from URI/package-list (repeatable)",
    )
    group.add_argument(
        "--linkoffline",
        action="append",
        nargs=2,
        default=[],
        metavar=("URI", "PACKAGE_LIST"),
        help="Documentation root with a separately located package list (repeatable)",
    )


class CLI:
    """Command-line interface handler."""

    def __init__(self) -> None:
        """Initialize CLI parser."""
        self.parser = self._create_parser()

    @staticmethod
    def _create_parser() -> argparse.ArgumentParser:
        """Create the argument parser.

        Returns:
            Configured ArgumentParser

        """
        parser = argparse.ArgumentParser(
            prog="umldoclet",
            description="umldoclet - Add UML class diagrams to generated API documentation",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
    # Run with umldoclet.yaml or config.yaml from the working directory
    %(prog)s

    # Run without a configuration file
    %(prog)s -d build/docs --model build/docs/model.json

    # Link types from an online documentation root
    %(prog)s -d build/docs --model model.json --link https://docs.oracle.com/javase/8/docs/api/

    # Local package list for remote documents
    %(prog)s --linkoffline https://example.org/apidocs/ lib/package-list
            """,
        )

        parser.add_argument(
            "--config",
            type=str,
            help="Path to configuration file. If not specified, uses CONFIG_PATH, then 'umldoclet.yaml', then 'config.yaml'.",
        )
        parser.add_argument(
            "--destination",
            "-d",
            type=str,
            help="Destination directory of the generated documentation",
        )
        parser.add_argument(
            "--model",
            type=str,
            help="Documentable-element model (JSON or YAML)",
        )
        parser.add_argument(
            "--encoding",
            type=str,
            help="Encoding of the generated pages (default: utf-8)",
        )
        parser.add_argument(
            "--qualified",
            action="store_true",
            default=None,
            help="Always use fully qualified class names",
        )
        parser.add_argument(
            "--verbose",
            "-v",
            action="store_true",
            help="Enable verbose logging",
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Suppress non-critical output",
        )

        _add_link_options(parser)
        return parser

    def parse_args(self, args: list[str] | None = None) -> argparse.Namespace:
        """Parse command-line arguments.

        Args:
            args: List of arguments (use sys.argv if None)

        Returns:
            Parsed arguments namespace

        """
        return self.parser.parse_args(args)
