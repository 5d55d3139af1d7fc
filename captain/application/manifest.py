"""
Parsing of Debian control stanzas into Package domain models.

Only the headers the fetch layer needs are modelled. The raw stanza is
kept verbatim on the Package so downstream tooling still sees every field.
"""

import re
from typing import Dict, Iterable, Iterator, List, Set

from .domain import Package

_HEADER = re.compile(r"^(Package|Filename|MD5sum|Depends|Recommends|Task):(.*)$")
_LIST_SEPARATOR = re.compile(r"[,|]")


def parse_list(value: str) -> List[str]:
    """
    Splits a relationship field into bare package names.

    Commas and pipes are treated alike and version constraints such as
    "(>= 1.0)" are dropped, so "a (>= 1), b | c" becomes ["a", "b", "c"].
    """
    names = []
    for token in _LIST_SEPARATOR.split(value):
        words = token.split()
        if words:
            names.append(words[0])
    return names


def parse_manifest(
    mirror: str, codename: str, component: str, manifest: str
) -> Package:
    """
    Builds a Package from a single manifest stanza.

    Scalar headers keep their last occurrence; list headers accumulate
    across repeats. Continuation lines are not interpreted.

    Args:
        mirror: The mirror the stanza was read from.
        codename: The release codename of the index.
        component: The archive component of the index.
        manifest: The raw stanza text.

    Returns:
        The parsed Package.
    """

    fields = {"Package": None, "Filename": None, "MD5sum": None}
    lists: Dict[str, Set[str]] = {"Depends": set(), "Recommends": set(), "Task": set()}

    for line in manifest.splitlines():
        match = _HEADER.match(line)
        if not match:
            continue
        header, value = match.groups()
        if header in lists:
            lists[header].update(parse_list(value))
        else:
            fields[header] = value.strip()

    return Package(
        name=fields["Package"],
        mirror=mirror,
        codename=codename,
        component=component,
        filename=fields["Filename"],
        md5sum=fields["MD5sum"],
        dependencies=frozenset(lists["Depends"]),
        recommends=frozenset(lists["Recommends"]),
        tasks=frozenset(lists["Task"]),
        manifest=manifest,
    )


def split_stanzas(lines: Iterable[str]) -> Iterator[str]:
    """Groups index lines into stanza texts, one per blank-line separated block."""
    stanza: List[str] = []
    for line in lines:
        if line.strip():
            stanza.append(line.rstrip("\n"))
        elif stanza:
            yield "\n".join(stanza) + "\n"
            stanza = []
    if stanza:
        yield "\n".join(stanza) + "\n"
