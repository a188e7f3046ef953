"""Reading and writing Java-style .properties files.

Parsing and escaping are done by ``javaproperties``. Files are read as
UTF-8, falling back to ISO-8859-1 (the java.util.Properties default) when
the bytes are not valid UTF-8. Output is always ASCII with ``\\uXXXX``
escapes, so either reader accepts it.
"""

from __future__ import annotations

from pathlib import Path

import javaproperties


def loads(text: str) -> dict[str, str]:
    """Parse properties text. Duplicate keys: the last one wins.

    Raises:
        ValueError: on a malformed ``\\u`` escape
    """
    return javaproperties.loads(text)


def load(path: Path) -> dict[str, str]:
    data = path.read_bytes()
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        text = data.decode("iso-8859-1")
    return loads(text)


def dumps(properties: dict[str, str]) -> str:
    """Serialize a mapping as ``key=value`` lines, escaped like Properties.store."""
    return javaproperties.dumps(properties, timestamp=False)


def dump(properties: dict[str, str], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps(properties), encoding="ascii")
