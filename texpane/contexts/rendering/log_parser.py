"""
Compiler log scraping.

Pure functions over captured compiler output: line numbers of errors (for
source highlighting) and the error/warning messages (for summaries).
"""

import re
from typing import List, Tuple

from texpane.contexts.rendering.logger import _log_warning

# A line reference must start the line: "l.<digits>"
LINE_REFERENCE_PATTERN = re.compile(r"^l\.[0-9]+")

ERROR_PATTERN = re.compile(r"^! (.+)$", re.MULTILINE)

WARNING_PATTERNS = [
    re.compile(r"LaTeX Warning: (.+)", re.MULTILINE),
    re.compile(r"Package \w+ Warning: (.+)", re.MULTILINE),
    re.compile(r"Overfull \\hbox \((.+)\)", re.MULTILINE),
    re.compile(r"Underfull \\hbox \((.+)\)", re.MULTILINE),
]


def extract_error_line_tokens(output: str) -> List[str]:
    """
    Extract line-number tokens from compiler output.

    Keeps lines that start with ``l.`` followed by digits, drops the ``l.``
    prefix, trims whitespace and takes the first field of what remains.
    Order of appearance is preserved.

    Args:
        output: Combined stdout/stderr of the compiler

    Returns:
        Tokens such as ["12", "45"]

    Example:
        >>> extract_error_line_tokens("l.12 Undefined control sequence\\nl.45   \\n")
        ['12', '45']
    """
    tokens = []
    for line in output.split("\n"):
        if not LINE_REFERENCE_PATTERN.match(line):
            continue
        remainder = line[2:].strip()
        tokens.append(remainder.split()[0])
    return tokens


def extract_error_lines(output: str) -> List[int]:
    """
    Line numbers referenced by errors in compiler output.

    Tokens that are not plain integers (e.g. "12abc") are skipped with a warning.
    """
    lines = []
    for token in extract_error_line_tokens(output):
        try:
            lines.append(int(token))
        except ValueError:
            _log_warning(f"Skipping unparseable line reference: l.{token}")
    return lines


def parse_latex_diagnostics(output: str) -> Tuple[List[str], List[str]]:
    """
    Parse compiler output for error and warning messages.

    Args:
        output: Compiler output or .log file content

    Returns:
        Tuple of (errors, warnings)
    """
    errors = [match.group(1).strip() for match in ERROR_PATTERN.finditer(output)]

    warnings = []
    for pattern in WARNING_PATTERNS:
        for match in pattern.finditer(output):
            warnings.append(match.group(1).strip())

    return errors, warnings
