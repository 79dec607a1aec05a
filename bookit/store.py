# -*- coding: utf-8 -*-
"""bookit.store
License:  MIT
About:
The persistence engine shared by every record type. A Store owns one
collection file; each mutation reads the whole collection, checks the
identifier precondition, changes the in-memory mapping and writes the
whole collection back.

"""
import logging
import os
import tempfile

from bookit.codecs import codec_for
from bookit.errors import (
    CorruptionError,
    DecodeError,
    DuplicateIdentifierError,
    MissingIdentifierError,
    ReadError,
    WriteError)

logger = logging.getLogger(__name__)


class Store():
    """Reads and mutates one collection of records.

    Attributes:
        record_type (type): the record class of the collection.
        codec (Codec):      converts the collection to and from text.
        path (str):         the backing file.

    """
    def __init__(self, record_type, codec, path):
        """Initializes a Store() object."""
        self.record_type = record_type
        self.codec = codec
        self.path = str(path)

    @classmethod
    def for_record(cls, config, record_type):
        """Build the store for a record type in the configured data
        directory.

        Args:
            config (Config):    the resolved configuration.
            record_type (type): the record class.

        Returns:
            store (Store):  the store for the collection.

        """
        path = os.path.join(config.data_dir, record_type.FILE)
        return cls(record_type, codec_for(record_type), path)

    def load(self):
        """Read the full collection. A missing file is an empty
        collection.

        Returns:
            mapping (dict): identifier to record.

        """
        if not os.path.exists(self.path):
            logger.debug("%s does not exist, empty collection", self.path)
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as data_file:
                text = data_file.read()
        except (OSError, UnicodeDecodeError) as err:
            raise ReadError(self.path, str(err)) from err
        try:
            return self.codec.decode(text)
        except DecodeError as err:
            raise CorruptionError(self.path, str(err)) from err

    def commit(self, mapping):
        """Write the full collection, replacing the backing file.

        The text is written to a temporary file beside the target and
        moved into place, so a failed write leaves the old file intact.

        Args:
            mapping (dict): identifier to record.

        """
        text = self.codec.encode(mapping)
        directory = os.path.dirname(self.path) or "."
        name = os.path.basename(self.path)
        try:
            handle, tmp_path = tempfile.mkstemp(
                prefix=f".{name}.", suffix=".tmp", dir=directory)
        except OSError as err:
            raise WriteError(self.path, str(err)) from err
        try:
            with os.fdopen(handle, "w", encoding="utf-8") as tmp_file:
                tmp_file.write(text)
                tmp_file.flush()
                os.fsync(tmp_file.fileno())
            os.replace(tmp_path, self.path)
        except OSError as err:
            try:
                os.remove(tmp_path)
            except OSError:
                logger.debug("could not remove %s", tmp_path)
            raise WriteError(self.path, str(err)) from err
        logger.debug("committed %d record(s) to %s", len(mapping), self.path)

    def identifiers(self, mapping=None):
        """The sorted identifiers of the collection.

        Args:
            mapping (dict): an already loaded collection (optional).

        Returns:
            identifiers (list): every identifier, sorted.

        """
        if mapping is None:
            mapping = self.load()
        return sorted(mapping)

    def add(self, record):
        """Insert a new record.

        Args:
            record (obj):   the record to insert.

        """
        slug = record.identifier()
        mapping = self.load()
        if slug in mapping:
            raise DuplicateIdentifierError(slug)
        mapping[slug] = record
        self.commit(mapping)
        logger.debug("added %s '%s'", self.record_type.LABEL, slug)

    def delete(self, slug):
        """Remove a record by identifier.

        Args:
            slug (str): the identifier to remove.

        """
        mapping = self.load()
        if slug not in mapping:
            raise MissingIdentifierError(slug, self.identifiers(mapping))
        del mapping[slug]
        self.commit(mapping)
        logger.debug("deleted %s '%s'", self.record_type.LABEL, slug)

    def overwrite(self, record):
        """Replace an existing record that has the same identifier.

        Args:
            record (obj):   the replacement record.

        """
        slug = record.identifier()
        mapping = self.load()
        if slug not in mapping:
            raise MissingIdentifierError(slug, self.identifiers(mapping))
        del mapping[slug]
        mapping[slug] = record
        self.commit(mapping)
        logger.debug("overwrote %s '%s'", self.record_type.LABEL, slug)

    def retrieve(self, slug):
        """Look up a record by exact identifier.

        Args:
            slug (str): the identifier to find.

        Returns:
            record (obj):   the matching record.

        """
        mapping = self.load()
        record = mapping.get(slug)
        if record is None:
            raise MissingIdentifierError(slug, self.identifiers(mapping))
        return record

    def retrieve_all(self):
        """Every record of the collection, in no particular order."""
        return list(self.load().values())
