"""Import-annotation stripping.

Go package clauses may carry a canonical import path annotation, either as
a line comment or as a block comment:

    package foo // import "example.com/foo"
    package foo /* import "example.com/foo" */

Vendoring tools historically rewrote such lines, so two otherwise identical
files may differ only in the annotation. Stripping it before hashing or
diffing keeps that rewrite from registering as drift.
"""

import io
import re
from collections.abc import Collection
from pathlib import Path

from vendortrace.domain.entities import NormalizedContent
from vendortrace.domain.exceptions import FileAccessError

DEFAULT_EXTENSIONS = (".go",)

_QUOTED = rb'(?:"[^"]+"|`[^`]+`)'
_IMPORT = rb"\s*import\s+" + _QUOTED + rb"\s*"

IMPORT_COMMENT_RE = re.compile(
    rb"^(package\s+\w+)\s+(?://" + _IMPORT + rb"$|/\*" + _IMPORT + rb"\*/)(.*)"
)


def remove_import_comment(line: bytes) -> bytes | None:
    """Drop the import annotation from a single line.

    Args:
        line: One line of source, without its trailing newline.

    Returns:
        The rewritten line, or None if the line carries no annotation.
    """
    match = IMPORT_COMMENT_RE.match(line)
    if match is None:
        return None
    # Package clause plus anything after the closing "*/"
    return match.group(1) + match.group(2)


def strip_import_comment_bytes(data: bytes) -> NormalizedContent:
    """Normalize in-memory source content.

    Every emitted line ends with a newline. A final line without one is
    terminated, and that alone counts as a change.
    """
    out = io.BytesIO()
    changed = False
    for line in io.BytesIO(data):
        body = line[:-1] if line.endswith(b"\n") else line
        if len(body) == len(line):
            changed = True

        replacement = remove_import_comment(body)
        if replacement is not None:
            body = replacement
            changed = True

        out.write(body + b"\n")
    return NormalizedContent(changed=changed, content=out.getvalue())


def strip_import_comment(
    source: Path,
    extensions: Collection[str] = DEFAULT_EXTENSIONS,
) -> NormalizedContent:
    """Normalize a source file by removing its import annotation.

    Files whose suffix is not in extensions are returned unchanged.

    Args:
        source: File to read.
        extensions: File suffixes treated as source files.

    Returns:
        NormalizedContent with the bytes to hash or compare.

    Raises:
        FileAccessError: If the file cannot be read.
    """
    try:
        data = source.read_bytes()
    except OSError as e:
        raise FileAccessError(f"strip_import_comment: cannot read {source}: {e}") from e

    if source.suffix not in extensions:
        return NormalizedContent(changed=False, content=data)
    return strip_import_comment_bytes(data)
