# -*- coding: utf-8 -*-
"""bookit.errors
License:  MIT
About:
Error types raised by the storage engine, the query pipeline and the
command-line shorthand parsers. Every error carries a `kind` so the
command layer can decide how to report it without string matching.

"""

# identifiers listed in a MissingIdentifierError
MAX_AVAILABLE = 10


class BookitError(Exception):
    """Base class for all bookit errors.

    Attributes:
        kind (str):     a stable name for the error category.

    """
    kind = "bookit"
    fatal = True


class ConfigurationError(BookitError):
    """A required configuration value is missing or unusable."""
    kind = "configuration"


class StoreError(BookitError):
    """An I/O level failure on a collection's backing file.

    Attributes:
        path (str):     the backing file.
        reason (str):   the underlying failure.

    """
    def __init__(self, path, reason):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class ReadError(StoreError):
    """The backing file exists but could not be read."""
    kind = "read"


class CorruptionError(StoreError):
    """The backing file was read but could not be decoded.

    The `reason` is the decode diagnostic, kept verbatim so the user can
    inspect the file by hand.
    """
    kind = "corruption"


class WriteError(StoreError):
    """A commit failed; the previous file content is untouched."""
    kind = "write"


class CodecError(BookitError):
    """Base class for codec failures."""


class DecodeError(CodecError):
    """Text is not well-formed or holds an invalid record."""
    kind = "decode"


class EncodeError(CodecError):
    """A collection could not be serialized."""
    kind = "encode"


class PreconditionError(BookitError):
    """An identifier precondition on a store operation was violated.

    Attributes:
        slug (str):     the identifier concerned.

    """
    fatal = False

    def __init__(self, slug, message):
        self.slug = slug
        super().__init__(message)


class DuplicateIdentifierError(PreconditionError):
    """The identifier already exists in the collection."""
    kind = "duplicate"

    def __init__(self, slug):
        super().__init__(slug, f"item with slug '{slug}' already exists")


class MissingIdentifierError(PreconditionError):
    """The identifier does not exist in the collection.

    Attributes:
        slug (str):         the identifier that was not found.
        available (list):   up to MAX_AVAILABLE known identifiers.
        truncated (bool):   more identifiers exist than are listed.

    """
    kind = "missing"

    def __init__(self, slug, available=None):
        available = list(available or [])
        self.available = available[:MAX_AVAILABLE]
        self.truncated = len(available) > MAX_AVAILABLE
        super().__init__(slug, f"'{slug}' not found")


class EmptyResultError(BookitError):
    """A filter step was handed an empty set of candidates.

    Attributes:
        step (str):     the name of the filter that was not run.

    """
    kind = "empty"
    fatal = False

    def __init__(self, step=None):
        self.step = step
        super().__init__("no results based on given filters")


class DirectiveError(BookitError):
    """A command-line shorthand (time, date, filter, sort) is invalid.

    Attributes:
        input (str):    the text that failed to parse.
        context (str):  what was wrong with it.

    """
    kind = "directive"
    fatal = False

    def __init__(self, text, context):
        self.input = text
        self.context = context
        super().__init__(f"unable to parse '{text}' - {context}")
