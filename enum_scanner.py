# enum_scanner.py
# Line-oriented scanner that extracts the first enum declaration of a C++ header.
import re
import sys
from typing import Iterable, List, Optional

from enum_errors import EmptyEnumName, HeaderNotFound, NoEnclosingNamespace, TruncatedBody
from enum_header_parser import parse_enum_line, parse_namespace_line
from enum_model import EnumScanResult

NAMESPACE_PREFIX = 'namespace '
ENUM_PREFIX = 'enum '

# Leading identifier characters of a line; everything from the first other character is dropped.
_WORD_PREFIX = re.compile(r'[A-Za-z0-9_]*')


def keep_identifier(text: str) -> str:
    """
    Cut a string at its first character that is not alphanumeric or '_'.
    'Red = 3, // doc' becomes 'Red'.
    """
    return _WORD_PREFIX.match(text).group(0)


class EnumScanner:
    """
    Two-phase scanner: first locate the enum header (collecting enclosing namespaces on the way),
    then collect enumerator names until the closing brace.
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def debug_print(self, message: str) -> None:
        if self.verbose:
            print(f"[DEBUG] {message}", file=sys.stderr)

    def scan_file(self, path: str) -> EnumScanResult:
        # Only ASCII survives the scan; undecodable bytes (e.g. Latin-1 in comments) pass through.
        with open(path, 'r', encoding='utf-8-sig', errors='surrogateescape') as f:
            return self.scan(f, source=path)

    def scan(self, lines: Iterable[str], source: Optional[str] = None) -> EnumScanResult:
        """
        Scan an iterable of text lines.

        Raises:
            ScanError: one of HeaderNotFound, NoEnclosingNamespace, EmptyEnumName,
                TruncatedBody or MalformedHeader.
        """
        line_iter = enumerate(lines, start=1)
        namespaces: List[str] = []
        enum = None
        header_line_no = None

        # Phase 1: locate the enum header.
        for line_no, raw in line_iter:
            line = raw.strip()
            if line.startswith(ENUM_PREFIX):
                enum = parse_enum_line(line, source, line_no)
                header_line_no = line_no
                self.debug_print(f"Found {enum!r} at line {line_no}")
                break
            if line.startswith(NAMESPACE_PREFIX):
                segments = parse_namespace_line(line, source, line_no)
                self.debug_print(f"Namespace line {line_no}: {segments}")
                namespaces.extend(segments)

        if enum is None:
            raise HeaderNotFound("unable to locate enum", source)
        if not namespaces:
            raise NoEnclosingNamespace("enum found outside of a namespace", source, header_line_no)
        if not enum.name:
            raise EmptyEnumName("empty enum name found", source, header_line_no)

        # Phase 2: collect member names until the closing brace.
        members = self._scan_members(line_iter, source, header_line_no)
        self.debug_print(f"Members of {enum.name}: {members}")
        return EnumScanResult(namespaces, enum, members)

    def _scan_members(self, line_iter, source: Optional[str], header_line_no: int) -> List[str]:
        members: List[str] = []
        for line_no, raw in line_iter:
            line = raw.strip()
            if not line:
                continue
            if line[0] == '}':
                return members
            if line[0] == '/':
                continue
            name = keep_identifier(line)
            if name:
                members.append(name)
            else:
                self.debug_print(f"Ignoring line {line_no}: {line!r}")
        raise TruncatedBody("unable to read enum values: missing closing '}'", source, header_line_no)


def scan_enum(lines: Iterable[str], source: Optional[str] = None, verbose: bool = False) -> EnumScanResult:
    return EnumScanner(verbose).scan(lines, source)


def scan_enum_file(path: str, verbose: bool = False) -> EnumScanResult:
    return EnumScanner(verbose).scan_file(path)
