import argparse
import io
import logging
import sys
import textwrap

from . import AuditSession, AuditSettings, FilesystemInodeLookup, MalformedLineError
from .manifest.settings import (SETTING_INODES_ROOT, SETTING_LOGGING_LEVEL, SETTING_LOGGING_PATH,
                                SETTING_MANIFEST_STRICT, SETTING_REPORT_INODES)
from .utils.profiling import profile_main

EXIT_OK = 0
EXIT_CANNOT_OPEN = 1
EXIT_USAGE = 2
EXIT_MALFORMED = 3

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='metaudit',
        description='Audit a METALOG package manifest: per-package file counts, sizes and setuid/setgid '
                    'files, repeated filenames, and hard links with inconsistent metadata.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
            Examples:
              metaudit /usr/obj/usr/src/amd64.amd64/release/dist/METALOG
              metaudit --inodes --root /mnt/image METALOG

            Findings are part of the report and never change the exit status.
            ''').strip())
    parser.add_argument(
        'manifest',
        metavar='METALOG',
        help='Path to the manifest file to audit')
    parser.add_argument(
        '--config',
        metavar='PATH',
        help='TOML settings file. If not provided, uses the METAUDIT_CONFIG environment variable, if set.')
    parser.add_argument(
        '--inodes',
        action='store_true',
        default=None,
        help='Also report hard links whose manifest entries disagree (default: off, or report.inodes from '
             'settings)')
    parser.add_argument(
        '--root',
        metavar='PATH',
        help='Directory the manifest filenames are resolved against for the inode report (default: /, or '
             'inodes.root from settings)')
    parser.add_argument(
        '--strict',
        action='store_true',
        default=None,
        help='Abort on the first malformed manifest line instead of skipping it')
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Write debug logging to standard error')
    parser.add_argument(
        '--log-file',
        metavar='PATH',
        help='Path to log file. If not provided, uses logging.path from settings or no log file.')
    parser.add_argument(
        '--log-level',
        metavar='LEVEL',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults to INFO with a log file, DEBUG '
             'with --verbose.')
    return parser


def configure_logging(log_file: str | None, log_level: str | None, verbose: bool) -> bool:
    """Install log handlers for the run. Returns False when nothing was requested."""
    handlers: list[logging.Handler] = []
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
    if verbose:
        handlers.append(logging.StreamHandler(sys.stderr))
    if not handlers:
        return False

    if log_level is None:
        log_level = 'DEBUG' if verbose else 'INFO'

    logging.basicConfig(level=getattr(logging, log_level), format=LOG_FORMAT, handlers=handlers)
    return True


def _report_malformed(e: MalformedLineError):
    print(f"warning: skipping malformed line {e.line_number}: {e.line}", file=sys.stderr)


@profile_main
def metaudit_main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = AuditSettings.from_environment(args.config)
    except (OSError, ValueError) as e:
        # tomllib.TOMLDecodeError is a ValueError
        print(f"metaudit: cannot load settings: {e}", file=sys.stderr)
        return EXIT_USAGE

    log_file = args.log_file or settings.get(SETTING_LOGGING_PATH)
    log_level = args.log_level or settings.get(SETTING_LOGGING_LEVEL)
    configure_logging(log_file, log_level, args.verbose)

    include_inodes = args.inodes if args.inodes is not None else bool(settings.get(SETTING_REPORT_INODES, False))
    strict = args.strict if args.strict is not None else bool(settings.get(SETTING_MANIFEST_STRICT, False))
    root = args.root or settings.get(SETTING_INODES_ROOT, '/')

    try:
        session = AuditSession(
            args.manifest,
            strict=strict,
            inode_lookup=FilesystemInodeLookup(root),
            on_malformed=_report_malformed)
    except MalformedLineError as e:
        print(f"metaudit: {args.manifest}: {e}", file=sys.stderr)
        return EXIT_MALFORMED
    except OSError as e:
        print(f"cannot open {args.manifest}: {e.strerror or e}", file=sys.stderr)
        return EXIT_CANNOT_OPEN

    sys.stdout.write(session.render(include_inodes=include_inodes))
    return EXIT_OK


def preserve_undecodable_bytes(*streams):
    """Write surrogate-escaped manifest bytes back out unchanged instead of failing."""
    for stream in streams:
        if isinstance(stream, io.TextIOWrapper):
            stream.reconfigure(errors='surrogateescape')


def main():
    preserve_undecodable_bytes(sys.stdout, sys.stderr)
    sys.exit(metaudit_main())


if __name__ == '__main__':
    main()
