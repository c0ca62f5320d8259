#!/usr/bin/env python3
"""
enum-strings

Reads a C++ header containing a single enum declaration and writes a companion source
file defining to_string, from_string and from_integer for that enum. Keeps the
conversion functions in sync with the enum's member list without hand-maintained
boilerplate.

Usage:
    enum-strings [options] <input-file> <output-file>

Arguments:
    input-file          : Header containing the enum declaration
    output-file         : Source file to generate
    --preset            : Template preset (std or caf, default: std)
    --header-extension  : Extension of the enum's own header in the generated #include (default: .hpp)
    --string-view-type  : Parameter type of the generated from_string (default depends on preset)
    --include           : Additional header to include in the generated file (repeatable)
    --check             : Do not write; exit with status 1 if the output file is out of sync
    --verbose, -v       : Print debug information to stderr

Environment:
    ENUM_STRINGS_PRESET, ENUM_STRINGS_HEADER_EXTENSION and ENUM_STRINGS_VERBOSE override
    the matching command line options.

Example:
    enum-strings libcaf_core/caf/sec.hpp libcaf_core/caf/sec_strings.cpp --preset caf
"""

import argparse
import os
import sys
import tempfile
from typing import Any, Dict, Optional

from enum_errors import EnumStringsError
from enum_generators.enum_strings_generator import PRESETS, CppEnumStringsGenerator, resolve_options
from enum_model import EnumScanResult
from enum_scanner import EnumScanner


class EnumStringsConverter:
    """
    Scans the input header and writes the generated conversion functions.
    """

    def __init__(self, input_file: str, output_file: str, options: Dict[str, Any] = None, verbose: bool = False):
        """
        Args:
            input_file: Path to the header containing the enum declaration
            output_file: Path of the source file to generate
            options: Generator options (see resolve_options)
            verbose: Whether to print debug information (default: False)
        """
        self.input_file = input_file
        self.output_file = output_file
        self.options = options if options is not None else resolve_options()
        self.verbose = verbose
        self.scan_result: Optional[EnumScanResult] = None

    def debug_print(self, message: str) -> None:
        if self.verbose:
            print(f"[DEBUG] {message}", file=sys.stderr)

    def log_error(self, error: str) -> None:
        print(f"[ERROR] {error}", file=sys.stderr)

    def scan_input_file(self) -> bool:
        """
        Scan the input file for the enum declaration.

        Returns:
            bool: True if scanning was successful, False otherwise
        """
        scanner = EnumScanner(self.verbose)
        try:
            self.scan_result = scanner.scan_file(self.input_file)
        except EnumStringsError as e:
            self.log_error(str(e))
            return False
        except OSError as e:
            self.log_error(f"unable to open input file: {self.input_file} ({e.strerror or e})")
            return False
        self.debug_print(f"Scanned {self.scan_result!r}")
        return True

    def render(self) -> str:
        generator = CppEnumStringsGenerator(self.scan_result, self.options)
        return generator.generate_source()

    def generate_output(self) -> bool:
        """
        Write the generated source file. The content is written to a temporary file next to
        the output and moved into place, so a failure never leaves a partial file behind.
        An output file that already has the same content is left untouched.

        Returns:
            bool: True if generation was successful, False otherwise
        """
        if not self.scan_result:
            self.log_error("No scan result available. Scan input file first.")
            return False

        content = self.render().encode('utf-8', 'surrogateescape')
        if self._read_existing() == content:
            self.debug_print(f"{self.output_file} is up to date")
            return True

        out_dir = os.path.dirname(os.path.abspath(self.output_file))
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(prefix='.enum-strings-', suffix='.tmp', dir=out_dir)
            with os.fdopen(fd, 'wb') as f:
                f.write(content)
            os.chmod(tmp_path, self._output_mode())
            os.replace(tmp_path, self.output_file)
            tmp_path = None
        except OSError as e:
            self.log_error(f"unable to open output file: {self.output_file} ({e.strerror or e})")
            return False
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
        self.debug_print(f"Wrote {self.output_file} ({len(self.scan_result.members)} members)")
        return True

    def check_output(self) -> bool:
        """
        Compare the output file with what would be generated.

        Returns:
            bool: True if the output file exists and is up to date, False otherwise
        """
        if not self.scan_result:
            self.log_error("No scan result available. Scan input file first.")
            return False
        if self._read_existing() != self.render().encode('utf-8', 'surrogateescape'):
            self.log_error(f"{self.output_file} is out of sync with {self.input_file}")
            return False
        return True

    def _read_existing(self) -> Optional[bytes]:
        try:
            with open(self.output_file, 'rb') as f:
                return f.read()
        except OSError:
            return None

    def _output_mode(self) -> int:
        """
        Permission bits for the written file: those of the file being replaced, or the
        default for a new file under the current umask.
        """
        try:
            return os.stat(self.output_file).st_mode & 0o7777
        except OSError:
            pass
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def parse_arguments(argv=None):
    """
    Parse command line arguments.

    Returns:
        argparse.Namespace: Parsed command line arguments
    """
    parser = argparse.ArgumentParser(
        prog='enum-strings',
        description="Generate to_string/from_string/from_integer for a C++ enum",
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument('input_file', help='Header containing the enum declaration')
    parser.add_argument('output_file', help='Source file to generate')
    parser.add_argument('--preset', choices=sorted(PRESETS), default=None,
                        help='Template preset (default: std)')
    parser.add_argument('--header-extension', default=None,
                        help="Extension of the enum's own header (default: .hpp)")
    parser.add_argument('--string-view-type', default=None,
                        help='Parameter type of the generated from_string')
    parser.add_argument('--include', action='append', dest='extra_includes', default=None,
                        help='Additional header to include (repeatable)')
    parser.add_argument('--check', action='store_true',
                        help='Exit with status 1 if the output file is out of sync instead of writing it')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose output for debugging')

    return parser.parse_args(argv)


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def main(argv=None) -> int:
    """
    Main entry point of the script.
    """
    args = parse_arguments(argv)

    # Override with environment variables if set
    preset = os.environ.get('ENUM_STRINGS_PRESET', args.preset)
    header_extension = os.environ.get('ENUM_STRINGS_HEADER_EXTENSION', args.header_extension)
    verbose = args.verbose
    if 'ENUM_STRINGS_VERBOSE' in os.environ:
        verbose = _env_flag(os.environ['ENUM_STRINGS_VERBOSE'])

    try:
        options = resolve_options(preset, {
            'header_extension': header_extension,
            'string_view_type': args.string_view_type,
            'extra_includes': args.extra_includes,
        })
    except ValueError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    converter = EnumStringsConverter(args.input_file, args.output_file, options, verbose)

    if not converter.scan_input_file():
        return 1

    if args.check:
        return 0 if converter.check_output() else 1

    return 0 if converter.generate_output() else 1


if __name__ == '__main__':
    sys.exit(main())
