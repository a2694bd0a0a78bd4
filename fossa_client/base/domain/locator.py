# (c) Nelen & Schuurmans

from urllib.parse import quote
from urllib.parse import unquote

__all__ = [
    "REF_SEPARATOR",
    "FETCHER_SEPARATOR",
    "revision_locator",
    "split_revision",
    "ref_of",
    "fetcher_of",
    "package_of",
    "version_of",
    "belongs_to",
    "encode_locator",
    "decode_locator",
]

# A locator looks like "fetcher+org/package$ref". The ref part is only present
# in revision (and dependency) locators.
REF_SEPARATOR = "$"
FETCHER_SEPARATOR = "+"


def revision_locator(project: str, ref: str) -> str:
    return f"{project}{REF_SEPARATOR}{ref}"


def split_revision(locator: str) -> tuple[str, str | None]:
    """Split a revision locator into the project locator and the ref"""
    project, sep, ref = locator.partition(REF_SEPARATOR)
    return project, (ref if sep else None)


def ref_of(locator: str, default: str | None = None) -> str | None:
    _, ref = split_revision(locator)
    return default if ref is None else ref


def fetcher_of(locator: str) -> str | None:
    fetcher, sep, _ = locator.partition(FETCHER_SEPARATOR)
    return fetcher if sep else None


def package_of(locator: str) -> str:
    """The part between the fetcher and the ref: 'npm+lodash$1.0' -> 'lodash'"""
    project, _ = split_revision(locator)
    _, _, package = project.rpartition(FETCHER_SEPARATOR)
    return package


def version_of(locator: str) -> str | None:
    return ref_of(locator)


def belongs_to(revision: str, project: str) -> bool:
    """Whether 'revision' is a revision of 'project'.

    A plain string prefix is not enough: 'custom+1/foo' is a prefix of
    'custom+1/foobar$main' but does not own it.
    """
    return revision.startswith(project + REF_SEPARATOR)


def encode_locator(locator: str) -> str:
    """Encode a locator into a single URL path segment ('+', '$', '/' included)"""
    return quote(locator, safe="")


def decode_locator(segment: str) -> str:
    return unquote(segment)
