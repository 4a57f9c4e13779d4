import base64
import json
import logging
import pickle
import typing as tp

import msgpack

from hoard._response import CachedResponse
from hoard._utils import collect_body

try:
    import yaml
except ImportError:  # pragma: no cover
    yaml = None  # type: ignore

__all__ = (
    "BaseSerializer",
    "JSONSerializer",
    "MsgPackSerializer",
    "PickleSerializer",
    "YAMLSerializer",
)

logger = logging.getLogger("hoard.serializers")


class StoredResponse(tp.TypedDict):
    status: int
    headers: tp.Dict[str, tp.List[str]]
    content: bytes
    created_at: float


def to_stored(response: CachedResponse) -> StoredResponse:
    if isinstance(response.body, tp.AsyncIterable):
        raise TypeError("Cannot serialize a response with an asynchronous body")
    if isinstance(response.body, tp.Iterator):
        # reading it would leave the live response with an exhausted body
        raise TypeError("Cannot serialize a response with a one-shot iterator body")
    content = collect_body(response.body)
    logger.debug("Collected %d bytes of response content", len(content))
    return StoredResponse(
        status=response.status,
        headers=response.headers.raw,
        content=content,
        created_at=response.created_at,
    )


def from_stored(stored: tp.Mapping[str, tp.Any]) -> CachedResponse:
    return CachedResponse(
        stored["status"],
        stored["headers"],
        [stored["content"]],
        created_at=stored["created_at"],
    )


def _encode_text(stored: StoredResponse) -> tp.Dict[str, tp.Any]:
    return {
        "status": stored["status"],
        "headers": stored["headers"],
        "content": base64.b64encode(stored["content"]).decode("ascii"),
        "created_at": stored["created_at"],
    }


def _decode_text(data: tp.Mapping[str, tp.Any]) -> StoredResponse:
    return StoredResponse(
        status=data["status"],
        headers=data["headers"],
        content=base64.b64decode(data["content"].encode("ascii")),
        created_at=data["created_at"],
    )


class BaseSerializer:
    def dumps(self, response: CachedResponse) -> tp.Union[str, bytes]:
        raise NotImplementedError()

    def loads(self, data: tp.Union[str, bytes]) -> CachedResponse:
        raise NotImplementedError()

    @property
    def is_binary(self) -> bool:
        raise NotImplementedError()


class PickleSerializer(BaseSerializer):
    """
    A simple pickle-based serializer.
    """

    def dumps(self, response: CachedResponse) -> tp.Union[str, bytes]:
        """
        Dumps the HTTP response.

        :param response: An HTTP response
        :type response: CachedResponse
        :return: Serialized response
        :rtype: tp.Union[str, bytes]
        """
        return pickle.dumps(to_stored(response))

    def loads(self, data: tp.Union[str, bytes]) -> CachedResponse:
        """
        Loads the HTTP response from serialized data.

        :param data: Serialized data
        :type data: tp.Union[str, bytes]
        :return: HTTP response
        :rtype: CachedResponse
        """
        assert isinstance(data, bytes)
        return from_stored(pickle.loads(data))

    @property
    def is_binary(self) -> bool:  # pragma: no cover
        return True


class MsgPackSerializer(BaseSerializer):
    """A compact msgpack-based serializer."""

    def dumps(self, response: CachedResponse) -> tp.Union[str, bytes]:
        return tp.cast(bytes, msgpack.packb(to_stored(response)))

    def loads(self, data: tp.Union[str, bytes]) -> CachedResponse:
        assert isinstance(data, bytes)
        return from_stored(msgpack.unpackb(data))

    @property
    def is_binary(self) -> bool:  # pragma: no cover
        return True


class JSONSerializer(BaseSerializer):
    """A simple json-based serializer."""

    def dumps(self, response: CachedResponse) -> tp.Union[str, bytes]:
        """
        Dumps the HTTP response.

        The content is stored base64-encoded.

        :param response: An HTTP response
        :type response: CachedResponse
        :return: Serialized response
        :rtype: tp.Union[str, bytes]
        """
        return json.dumps(_encode_text(to_stored(response)), indent=4)

    def loads(self, data: tp.Union[str, bytes]) -> CachedResponse:
        """
        Loads the HTTP response from serialized data.

        :param data: Serialized data
        :type data: tp.Union[str, bytes]
        :return: HTTP response
        :rtype: CachedResponse
        """
        return from_stored(_decode_text(json.loads(data)))

    @property
    def is_binary(self) -> bool:
        return False


class YAMLSerializer(BaseSerializer):
    """A simple yaml-based serializer."""

    def dumps(self, response: CachedResponse) -> tp.Union[str, bytes]:
        """
        Dumps the HTTP response.

        :param response: An HTTP response
        :type response: CachedResponse
        :raises RuntimeError: When used without the `yaml` extension installed
        :return: Serialized response
        :rtype: tp.Union[str, bytes]
        """
        if yaml is None:  # pragma: no cover
            raise RuntimeError(
                f"The `{type(self).__name__}` was used, but the required packages were not found. "
                "Check that you have `hoard` installed with the `yaml` extension as shown.\n"
                "```pip install hoard[yaml]```"
            )
        return yaml.safe_dump(_encode_text(to_stored(response)), sort_keys=False)

    def loads(self, data: tp.Union[str, bytes]) -> CachedResponse:
        """
        Loads the HTTP response from serialized data.

        :param data: Serialized data
        :type data: tp.Union[str, bytes]
        :raises RuntimeError: When used without the `yaml` extension installed
        :return: HTTP response
        :rtype: CachedResponse
        """
        if yaml is None:  # pragma: no cover
            raise RuntimeError(
                f"The `{type(self).__name__}` was used, but the required packages were not found. "
                "Check that you have `hoard` installed with the `yaml` extension as shown.\n"
                "```pip install hoard[yaml]```"
            )
        return from_stored(_decode_text(yaml.safe_load(data)))

    @property
    def is_binary(self) -> bool:  # pragma: no cover
        return False
