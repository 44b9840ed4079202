#!/usr/bin/env python3
"""
Italian Fiscal Code - Main Entrypoint

Command line tool to build, validate and decode Italian fiscal codes
(codice fiscale), one at a time or for a whole CSV file.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core.code_builder import CodeBuilder, make_personal_data
from .core.code_validator import CodeValidator
from .core.errors import FiscalCodeError
from .core.fiscal_code_service import FiscalCodeService
from .places.belfiore import BelfioreDatabase, get_default_database
from .places.remote import RemotePlaceResolver, DEFAULT_TIMEOUT
from .places.resolver import PlaceResolver
from .reporting.audit_logger import generate_batch_report


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    format_str = '%(asctime)s - %(levelname)s - %(message)s'

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )


def create_place_resolver(args: argparse.Namespace, bundled: bool = True) -> Optional[PlaceResolver]:
    """
    Pick the place resolver from the command line options.

    Args:
        args: Parsed command line
        bundled: Fall back to the bundled sample database when neither
            --places nor --places-url is given; otherwise return None
    """
    if args.places_url:
        return RemotePlaceResolver(args.places_url, timeout=args.timeout, verify=not args.insecure)

    if args.places is None:
        return get_default_database() if bundled else None

    if not Path(args.places).exists():
        raise FiscalCodeError(f"Belfiore file not found: {args.places}", field='places')
    return BelfioreDatabase(args.places)


def cmd_build(args: argparse.Namespace) -> int:
    data = make_personal_data(args.surname, args.given_name, args.dob, args.sex, args.birthplace)
    code = CodeBuilder(create_place_resolver(args)).build(data)
    print(code)
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    # Places are only checked against an explicit --places or --places-url
    resolver = None if args.no_place_check else create_place_resolver(args, bundled=False)
    validator = CodeValidator(resolver)

    exit_code = 0
    for candidate in args.codes:
        result = validator.validate(candidate)
        if args.json:
            print(json.dumps(result.to_dict()))
        else:
            status = "VALID" if result.is_valid else "INVALID"
            rules = ', '.join(rule.value for rule in result.details)
            print(f"{result.candidate}: {status}" + (f" ({rules})" if rules else ""))
        if not result.is_valid:
            exit_code = 1
    return exit_code


def cmd_decode(args: argparse.Namespace) -> int:
    decoded = CodeValidator(create_place_resolver(args, bundled=False)).decode(args.code)
    if args.json:
        print(json.dumps(decoded.to_dict()))
    else:
        for key, value in decoded.to_dict().items():
            print(f"{key}: {value if value is not None else ''}")
    return 0


def cmd_batch(args: argparse.Namespace) -> int:
    if not Path(args.input_file).exists():
        print(f"Error: Input file not found: {args.input_file}", file=sys.stderr)
        return 1

    service = FiscalCodeService(create_place_resolver(args))
    stats = service.process_file(args.input_file, args.output)

    print(generate_batch_report(stats), file=sys.stderr)
    return 0 if stats.build_failures == 0 else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='fiscal-code',
        description="Build, validate and decode Italian fiscal codes (codice fiscale)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s build Rossi Mario 1985-04-15 M Roma
  %(prog)s validate RSSMRA85D15H501T
  %(prog)s decode RSSMRA85D15H501T --json
  %(prog)s batch people.csv -o people_with_codes.csv
  %(prog)s --places-url https://places.example.org/api build Rossi Mario 1985-04-15 M H501
        """
    )

    parser.add_argument('--places',
                        help='Belfiore CSV file (default: bundled sample for build and batch; '
                             'validate and decode only check places when this or --places-url is given)')
    parser.add_argument('--places-url',
                        help='Base URL of a remote place lookup service (overrides --places)')
    parser.add_argument('--timeout', type=float, default=DEFAULT_TIMEOUT,
                        help=f'Remote lookup timeout in seconds (default: {DEFAULT_TIMEOUT})')
    parser.add_argument('--insecure', action='store_true',
                        help='Do not verify TLS certificates of the lookup service')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable verbose logging')

    subparsers = parser.add_subparsers(dest='command', required=True)

    build = subparsers.add_parser('build', help='Compute a fiscal code')
    build.add_argument('surname')
    build.add_argument('given_name')
    build.add_argument('dob', help='Birth date (YYYY-MM-DD or DD/MM/YYYY)')
    build.add_argument('sex', help='M or F')
    build.add_argument('birthplace', help='Municipality, country or Belfiore code')
    build.set_defaults(func=cmd_build)

    validate = subparsers.add_parser('validate', help='Validate fiscal codes')
    validate.add_argument('codes', nargs='+')
    validate.add_argument('--json', action='store_true', help='JSON output')
    validate.add_argument('--no-place-check', action='store_true',
                          help='Skip the reverse lookup of the place code even with --places or --places-url')
    validate.set_defaults(func=cmd_validate)

    decode = subparsers.add_parser('decode', help='Decode a fiscal code')
    decode.add_argument('code')
    decode.add_argument('--json', action='store_true', help='JSON output')
    decode.set_defaults(func=cmd_decode)

    batch = subparsers.add_parser('batch', help='Compute fiscal codes for a CSV file')
    batch.add_argument('input_file', help='CSV with surname, given_name, dob, sex, birthplace')
    batch.add_argument('-o', '--output', help='Output CSV file')
    batch.set_defaults(func=cmd_batch)

    return parser


def main(argv: Optional[List[str]] = None):
    """Main entrypoint for the fiscal code tool."""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose)

    try:
        exit_code = args.func(args)
    except FiscalCodeError as e:
        logging.error(f"{type(e).__name__}: {e}")
        sys.exit(1)
    except Exception as e:
        logging.error(f"Processing failed: {e}")
        sys.exit(1)

    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
