"""Client wrapper for DynamoDB operations on the single event-planner table."""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

import boto3
from aws_lambda_powertools.logging import Logger
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from ..config.app import AppConfig
from ..middleware.exceptions import ItemNotFoundError, StorageGeneralError

logger = Logger()

# BatchWriteItem accepts at most 25 requests per call
BATCH_WRITE_LIMIT = 25


class DynamoDBClient:
    """Client wrapper for DynamoDB operations.

    Items are addressed by ``PK``/``SK``; the secondary index projects
    ``GSI1PK``/``GSI1SK``.
    """

    def __init__(self, config: AppConfig) -> None:
        """Initialize DynamoDB client.

        Args:
            config: Application configuration
        """
        self.config = config
        self.dynamodb = boto3.resource("dynamodb", region_name=config.aws_region)
        self.table = self.dynamodb.Table(config.dynamodb_table_name)  # type: ignore

    def get_item(self, pk: str, sk: str) -> Optional[Dict[str, Any]]:
        """Get an item from DynamoDB.

        Args:
            pk: Partition key
            sk: Sort key

        Returns:
            The item, or None if no item exists at the key

        Raises:
            StorageGeneralError: If the get operation fails
        """
        try:
            response = self.table.get_item(Key={"PK": pk, "SK": sk})
        except ClientError as e:
            raise StorageGeneralError(
                "Failed to get item from DynamoDB",
                details={"pk": pk, "sk": sk, "error": str(e)},
            )
        return response.get("Item")

    def put_item(self, item: Dict[str, Any]) -> None:
        """Put an item in DynamoDB, replacing any item stored at the same key.

        Args:
            item: Item to put, including its PK and SK attributes

        Raises:
            StorageGeneralError: If the put operation fails
        """
        logger.debug(
            "Putting item in DynamoDB",
            extra={"pk": item.get("PK"), "sk": item.get("SK")},
        )

        try:
            self.table.put_item(Item=item)
        except ClientError as e:
            raise StorageGeneralError(
                "Failed to put item in DynamoDB",
                details={"pk": item.get("PK"), "sk": item.get("SK"), "error": str(e)},
            )

    def update_item_fields(self, pk: str, sk: str, updates: Dict[str, Any]) -> None:
        """Update specific top-level fields of an existing item.

        Fields not named in ``updates`` are left untouched.

        Args:
            pk: The partition key
            sk: The sort key
            updates: Dictionary of field names and values to update

        Raises:
            ItemNotFoundError: If the item does not exist
            StorageGeneralError: For other DynamoDB errors
        """
        if not updates:
            return

        update_expression, names, values = build_update_expression(updates)

        try:
            self.table.update_item(
                Key={"PK": pk, "SK": sk},
                UpdateExpression=update_expression,
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
                ConditionExpression="attribute_exists(PK)",
            )
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "")
            if error_code == "ConditionalCheckFailedException":
                raise ItemNotFoundError(
                    pk=pk, sk=sk, message=f"Item with PK={pk} and SK={sk} not found"
                )
            raise StorageGeneralError(
                "Failed to update item in DynamoDB",
                details={"pk": pk, "sk": sk, "error": str(e)},
            )

    def delete_item(self, pk: str, sk: str) -> None:
        """Delete an item. Deleting a missing key is not an error.

        Raises:
            StorageGeneralError: If the delete operation fails
        """
        try:
            self.table.delete_item(Key={"PK": pk, "SK": sk})
        except ClientError as e:
            raise StorageGeneralError(
                "Failed to delete item from DynamoDB",
                details={"pk": pk, "sk": sk, "error": str(e)},
            )

    def _paginated_query(
        self,
        query_params: Dict[str, Any],
        limit: Optional[int] = None,
        run_query: Optional[Callable[..., Dict[str, Any]]] = None,
    ) -> List[Dict[str, Any]]:
        """Execute a paginated DynamoDB query, handling the 1MB response limit.

        Args:
            query_params: Dictionary of query parameters to pass to DynamoDB
            limit: Optional maximum number of items to return
            run_query: Query callable, ``self.table.query`` when omitted

        Returns:
            List of items matching the query

        Raises:
            StorageGeneralError: If the query operation fails
        """
        run_query = run_query or self.table.query
        try:
            items: List[Dict[str, Any]] = []
            last_evaluated_key = None

            while True:
                if last_evaluated_key:
                    query_params["ExclusiveStartKey"] = last_evaluated_key

                response = run_query(**query_params)
                items.extend(response.get("Items", []))

                if limit and len(items) >= limit:
                    items = items[:limit]
                    break

                last_evaluated_key = response.get("LastEvaluatedKey")
                if not last_evaluated_key:
                    break

            return items

        except ClientError as e:
            raise StorageGeneralError(
                "Failed to query items from DynamoDB",
                details={"error": str(e)},
            )

    def query(
        self,
        pk: str,
        sk_prefix: Optional[str] = None,
        sk_value: Optional[str] = None,
        index_name: Optional[str] = None,
        limit: Optional[int] = None,
        scan_forward: bool = True,
    ) -> List[Dict[str, Any]]:
        """Query all items sharing a partition key.

        When ``index_name`` is given the partition and sort conditions apply to
        the index attributes (``GSI1PK``/``GSI1SK``) instead of ``PK``/``SK``.

        Args:
            pk: Partition key value
            sk_prefix: Only return items whose sort key starts with this prefix
            sk_value: Only return the item with exactly this sort key
            index_name: Secondary index to query
            limit: Optional maximum number of items to return
            scan_forward: Ascending sort key order when True

        Returns:
            Items ordered by sort key

        Raises:
            StorageGeneralError: If the query operation fails
        """
        pk_name, sk_name = ("GSI1PK", "GSI1SK") if index_name else ("PK", "SK")

        key_condition = Key(pk_name).eq(pk)
        if sk_prefix:
            key_condition = key_condition & Key(sk_name).begins_with(sk_prefix)
        elif sk_value:
            key_condition = key_condition & Key(sk_name).eq(sk_value)

        query_params: Dict[str, Any] = {
            "KeyConditionExpression": key_condition,
            "ScanIndexForward": scan_forward,
        }
        if index_name:
            query_params["IndexName"] = index_name
        if limit:
            query_params["Limit"] = limit

        return self._paginated_query(query_params, limit)

    def query_prefixes(
        self, pk: str, sk_prefixes: Iterable[str]
    ) -> Dict[str, List[Dict[str, Any]]]:
        """Run one prefix query per sort-key prefix concurrently and join them.

        Worker threads go through the table's low-level client, which is safe
        to share between threads, and never through the ``Table`` resource.

        Args:
            pk: Partition key value shared by all queries
            sk_prefixes: Sort key prefixes to query

        Returns:
            Mapping of prefix to the items found under it

        Raises:
            StorageGeneralError: If any of the queries fails
        """
        prefixes = list(sk_prefixes)
        if not prefixes:
            return {}

        shared_client = self.table.meta.client
        table_name = self.config.dynamodb_table_name

        def query_prefix(prefix: str) -> List[Dict[str, Any]]:
            query_params = {
                "TableName": table_name,
                "KeyConditionExpression": Key("PK").eq(pk)
                & Key("SK").begins_with(prefix),
            }
            return self._paginated_query(query_params, run_query=shared_client.query)

        with ThreadPoolExecutor(max_workers=len(prefixes)) as executor:
            futures = {prefix: executor.submit(query_prefix, prefix) for prefix in prefixes}
            return {prefix: future.result() for prefix, future in futures.items()}

    def batch_delete_items(self, keys: List[Tuple[str, str]]) -> None:
        """Delete items in chunks of at most 25 keys per BatchWriteItem call.

        Chunks are not atomic with respect to each other: when a chunk fails,
        earlier chunks stay deleted and later ones are not attempted.

        Args:
            keys: List of (pk, sk) pairs

        Raises:
            StorageGeneralError: If a chunk fails or leaves unprocessed items
        """
        if not keys:
            return

        table_name = self.config.dynamodb_table_name
        for i in range(0, len(keys), BATCH_WRITE_LIMIT):
            chunk = keys[i : i + BATCH_WRITE_LIMIT]
            request_items = {
                table_name: [
                    {"DeleteRequest": {"Key": {"PK": pk, "SK": sk}}}
                    for pk, sk in chunk
                ]
            }

            try:
                response = self.dynamodb.batch_write_item(RequestItems=request_items)
            except ClientError as e:
                raise StorageGeneralError(
                    "Failed to perform batch delete operation",
                    details={"chunk_start": i, "error": str(e)},
                )

            unprocessed = response.get("UnprocessedItems", {}).get(table_name, [])
            if unprocessed:
                raise StorageGeneralError(
                    "Batch delete left unprocessed items",
                    details={"chunk_start": i, "unprocessed_count": len(unprocessed)},
                )

            logger.debug(
                "Batch delete chunk applied",
                extra={"chunk_start": i, "chunk_size": len(chunk)},
            )


def build_update_expression(
    updates: Dict[str, Any],
) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
    """Translate a field mapping into an aliased ``SET`` update expression.

    Attribute names are referenced by position (``#attr0``) rather than by
    their own text so reserved words and special characters are safe.

    Args:
        updates: Field names mapped to their new values

    Returns:
        Tuple of (update expression, attribute names, attribute values)
    """
    assignments = []
    names: Dict[str, str] = {}
    values: Dict[str, Any] = {}

    for index, (field_name, value) in enumerate(updates.items()):
        name_placeholder = f"#attr{index}"
        value_placeholder = f":val{index}"
        assignments.append(f"{name_placeholder} = {value_placeholder}")
        names[name_placeholder] = field_name
        values[value_placeholder] = value

    return "SET " + ", ".join(assignments), names, values
