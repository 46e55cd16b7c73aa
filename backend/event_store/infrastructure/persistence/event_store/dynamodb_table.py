"""DynamoDB table adapter."""

import asyncio
from collections.abc import Callable, Mapping
from decimal import Decimal
from typing import Any

import boto3
import structlog
from boto3.dynamodb.conditions import Key
from boto3.dynamodb.types import Binary
from botocore.exceptions import BotoCoreError, ClientError

from ....domain.shared import StoreUnavailableError
from .keys import AGGREGATE_ID

logger = structlog.get_logger()


def _to_dynamodb(value: Any) -> Any:
    # boto3 refuses floats; numbers must be Decimal.
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, Mapping):
        return {key: _to_dynamodb(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_to_dynamodb(item) for item in value]
    return value


def _from_dynamodb(value: Any) -> Any:
    if isinstance(value, Binary):
        return bytes(value.value)
    if isinstance(value, Mapping):
        return {key: _from_dynamodb(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_from_dynamodb(item) for item in value]
    return value


async def _call(operation: Callable[..., Any], **kwargs: Any) -> Any:
    try:
        return await asyncio.to_thread(operation, **kwargs)
    except (BotoCoreError, ClientError) as e:
        raise StoreUnavailableError(f"DynamoDB call failed: {e}") from e


class DynamoDBSearch:
    """Page cursor over a DynamoDB ``query`` or ``scan`` call.

    Follows ``LastEvaluatedKey`` until DynamoDB stops returning one.
    """

    def __init__(
        self,
        operation: Callable[..., dict[str, Any]],
        request: dict[str, Any],
        page_size: int | None = None,
    ):
        self._operation = operation
        self._request = dict(request)
        if page_size:
            self._request["Limit"] = page_size
        self._start_key: dict[str, Any] | None = None
        self._done = False

    @property
    def is_done(self) -> bool:
        return self._done

    async def next_page(self) -> list[dict[str, Any]]:
        if self._done:
            return []

        request = dict(self._request)
        if self._start_key is not None:
            request["ExclusiveStartKey"] = self._start_key

        response = await _call(self._operation, **request)
        self._start_key = response.get("LastEvaluatedKey")
        self._done = self._start_key is None
        return [_from_dynamodb(item) for item in response.get("Items", [])]


class DynamoDBTable:
    """Event table backed by a DynamoDB table.

    The table must use ``aggregateId`` as partition key and
    ``aggregateVersion`` (number) as sort key. The boto3 resource API is
    blocking, so every call is run in a worker thread.
    """

    def __init__(
        self,
        table_name: str,
        region_name: str = "ap-northeast-1",
        *,
        endpoint_url: str | None = None,
        page_size: int | None = None,
        resource: Any = None,
    ):
        self._dynamodb = resource or boto3.resource(
            "dynamodb",
            region_name=region_name,
            endpoint_url=endpoint_url,
        )
        self._table = self._dynamodb.Table(table_name)
        self._table_name = table_name
        self._page_size = page_size

    @property
    def name(self) -> str:
        return self._table_name

    async def put_item(self, document: Mapping[str, Any]) -> None:
        await _call(self._table.put_item, Item=_to_dynamodb(document))

    def query(self, partition_key_value: Any) -> DynamoDBSearch:
        return DynamoDBSearch(
            self._table.query,
            {"KeyConditionExpression": Key(AGGREGATE_ID).eq(_to_dynamodb(partition_key_value))},
            self._page_size,
        )

    def scan(self) -> DynamoDBSearch:
        return DynamoDBSearch(self._table.scan, {}, self._page_size)
