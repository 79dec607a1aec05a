# -*- coding: utf-8 -*-
"""bookit.codecs
License:  MIT
About:
Conversion between a whole collection of records (a dict of
identifier to record) and the text kept in its backing file.

"""
import json
import logging

import yaml

from bookit.errors import DecodeError, EncodeError

logger = logging.getLogger(__name__)


class Codec():
    """Converts a collection of one record type to and from text.

    Subclasses implement `_load` and `_dump` for their format; record
    validation and identifier checks are shared.

    Attributes:
        record_type (type): the record class of the collection.

    """
    name = None

    def __init__(self, record_type):
        """Initializes a Codec() object."""
        self.record_type = record_type

    def _load(self, text):
        raise NotImplementedError

    def _dump(self, data):
        raise NotImplementedError

    def decode(self, text):
        """Parse text into a collection.

        Args:
            text (str): the persisted text.

        Returns:
            mapping (dict): identifier to record.

        """
        if not text.strip():
            return {}
        data = self._load(text)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise DecodeError(
                f"expected a mapping of identifiers, "
                f"found {type(data).__name__}")
        mapping = {}
        for key, value in data.items():
            if not isinstance(value, dict):
                raise DecodeError(f"entry '{key}' is not a mapping")
            try:
                record = self.record_type.from_dict(value)
            except ValueError as err:
                raise DecodeError(f"entry '{key}': {err}") from err
            if record.identifier() != str(key):
                raise DecodeError(
                    f"entry '{key}' holds identifier "
                    f"'{record.identifier()}'")
            mapping[record.identifier()] = record
        logger.debug(
            "decoded %d %s record(s)", len(mapping), self.name)
        return mapping

    def encode(self, mapping):
        """Serialize a collection to text. A record that would not
        decode again is refused.

        Args:
            mapping (dict): identifier to record.

        Returns:
            text (str): the text to persist.

        """
        data = {}
        for key, record in mapping.items():
            if record.identifier() != key:
                raise EncodeError(
                    f"key '{key}' does not match identifier "
                    f"'{record.identifier()}'")
            try:
                data[key] = record.to_dict()
                self.record_type.from_dict(data[key])
            except (AttributeError, ValueError) as err:
                raise EncodeError(f"entry '{key}': {err}") from err
        return self._dump(data)


class UniqueKeyLoader(yaml.SafeLoader):
    """A SafeLoader that refuses repeated mapping keys."""

    def construct_mapping(self, node, deep=False):
        seen = set()
        for key_node, _ in node.value:
            if not isinstance(key_node, yaml.ScalarNode):
                continue
            key = self.construct_object(key_node, deep=deep)
            if key in seen:
                raise DecodeError(f"duplicate key '{key}'")
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


def _unique_pairs(pairs):
    data = {}
    for key, value in pairs:
        if key in data:
            raise DecodeError(f"duplicate key '{key}'")
        data[key] = value
    return data


class YamlCodec(Codec):
    """Structured-text codec for configuration-like collections."""
    name = "yaml"

    def _load(self, text):
        try:
            return yaml.load(text, Loader=UniqueKeyLoader)
        except yaml.YAMLError as err:
            raise DecodeError(str(err)) from err

    def _dump(self, data):
        try:
            return yaml.dump(
                data,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True)
        except yaml.YAMLError as err:
            raise EncodeError(str(err)) from err


class JsonCodec(Codec):
    """Record-per-key JSON codec for log collections."""
    name = "json"

    def _load(self, text):
        try:
            return json.loads(text, object_pairs_hook=_unique_pairs)
        except ValueError as err:
            raise DecodeError(str(err)) from err

    def _dump(self, data):
        try:
            return json.dumps(data, indent=4, ensure_ascii=False) + "\n"
        except (TypeError, ValueError) as err:
            raise EncodeError(str(err)) from err


CODECS = {
    YamlCodec.name: YamlCodec,
    JsonCodec.name: JsonCodec
}


def codec_for(record_type):
    """Build the codec named by a record type's FORMAT.

    Args:
        record_type (type): the record class.

    Returns:
        codec (Codec):  a codec bound to the record type.

    """
    return CODECS[record_type.FORMAT](record_type)
