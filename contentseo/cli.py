"""
Command line interface: generate sitemap.xml / robots.txt, watch the
content tree for changes, and write the visitor redirect script.
"""

import argparse
import logging
import os
import sys

from contentseo.config import CONTENT_DIR, OUTPUT_DIR
from contentseo.generators import generate_seo_files
from contentseo.redirect import write_redirect_script
from contentseo.watcher import run_watcher

logger = logging.getLogger(__name__)


class _MaxLevelFilter(logging.Filter):
    def __init__(self, level):
        super().__init__()
        self.level = level

    def filter(self, record):
        return record.levelno < self.level


def setup_logging():
    """Progress lines to stdout, warnings and errors to stderr."""
    level_name = (os.getenv("LOG_LEVEL") or "INFO").upper()
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.addFilter(_MaxLevelFilter(logging.WARNING))
    stdout_handler.setFormatter(formatter)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(formatter)

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        handlers=[stdout_handler, stderr_handler],
    )


def cmd_generate(args):
    """Generate sitemap.xml and robots.txt once."""
    logger.info("Starting SEO file generation...")
    report = generate_seo_files(CONTENT_DIR, OUTPUT_DIR)
    logger.info(
        f"SEO files generated: {len(report.boards)} boards, "
        f"{report.published_posts} published posts, {report.featured_posts} featured"
    )
    return 0


def cmd_watch(args):
    """Regenerate SEO files whenever the content tree changes."""
    logger.info("Starting content watcher")
    return run_watcher(CONTENT_DIR, OUTPUT_DIR)


def cmd_redirect_script(args):
    """Write redirect.js next to the generated SEO files."""
    write_redirect_script(OUTPUT_DIR)
    return 0


COMMANDS = {
    "generate": cmd_generate,
    "watch": cmd_watch,
    "redirect-script": cmd_redirect_script,
}


def run_command(name, args=None):
    try:
        result = COMMANDS[name](args)
        return result if result is not None else 0
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as e:
        logger.exception(f"Error: {e}")
        return 1


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="contentseo - sitemap.xml / robots.txt generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  contentseo generate         # Write sitemap.xml and robots.txt once
  contentseo watch            # Regenerate on content changes
  contentseo redirect-script  # Write redirect.js
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    subparsers.add_parser("generate", help="Generate sitemap.xml and robots.txt")
    subparsers.add_parser("watch", help="Watch content and regenerate on change")
    subparsers.add_parser("redirect-script", help="Write the visitor redirect script")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    setup_logging()
    return run_command(args.command, args)


def generate_main():
    setup_logging()
    sys.exit(run_command("generate"))


def watch_main():
    setup_logging()
    sys.exit(run_command("watch"))
