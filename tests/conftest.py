"""
conftest.py
-----------
Shared pytest fixtures for dynamo-rename tests.

Provides fixtures for:
- Sample items in DynamoDB attribute-value form
- An in-memory table client that paginates scans and evaluates write
  conditions the way DynamoDB does
- A botocore Stubber around a real DynamoDB client
"""
import copy

import boto3
import pytest
from botocore.exceptions import ClientError
from botocore.stub import Stubber


# ----- Item helpers -----

def S(value):
    """String attribute value."""
    return {"S": value}


def N(value):
    """Number attribute value."""
    return {"N": str(value)}


def M(**fields):
    """Map attribute value."""
    return {"M": fields}


def client_error(code, message, operation="PutItem"):
    """Build a botocore ClientError the way the service returns it."""
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


# ----- In-memory table -----

class FakeTable:
    """
    Minimal DynamoDB stand-in keyed on the 'id' attribute.

    `scan` honors ExclusiveStartKey and returns pages of `page_size` items.
    `put_item` evaluates "#n = :v AND ..." conditions against the stored
    item and raises ConditionalCheckFailedException when one fails.
    `fail_puts` maps a put call number (1-based) to an exception to raise.
    """

    def __init__(self, items, page_size=2, fail_puts=None, table_name="users"):
        self.table_name = table_name
        self.items = [copy.deepcopy(item) for item in items]
        self.page_size = page_size
        self.fail_puts = fail_puts or {}
        self.scan_calls = []
        self.put_calls = []

    def _index(self, key):
        for position, item in enumerate(self.items):
            if item["id"] == key:
                return position
        return None

    def get(self, item_id):
        position = self._index(S(item_id))
        return None if position is None else self.items[position]

    def scan(self, TableName, ExclusiveStartKey=None):
        assert TableName == self.table_name
        self.scan_calls.append(ExclusiveStartKey)
        start = 0
        if ExclusiveStartKey is not None:
            start = self._index(ExclusiveStartKey["id"]) + 1
        page = self.items[start:start + self.page_size]
        response = {"Items": copy.deepcopy(page), "Count": len(page)}
        if start + self.page_size < len(self.items):
            response["LastEvaluatedKey"] = {"id": page[-1]["id"]}
        return response

    def put_item(
        self,
        TableName,
        Item,
        ConditionExpression=None,
        ExpressionAttributeNames=None,
        ExpressionAttributeValues=None,
    ):
        assert TableName == self.table_name
        self.put_calls.append(
            {
                "Item": Item,
                "ConditionExpression": ConditionExpression,
                "ExpressionAttributeNames": ExpressionAttributeNames,
                "ExpressionAttributeValues": ExpressionAttributeValues,
            }
        )
        failure = self.fail_puts.get(len(self.put_calls))
        if failure is not None:
            raise failure

        position = self._index(Item["id"])
        stored = self.items[position] if position is not None else {}

        if ConditionExpression:
            for check in ConditionExpression.split(" AND "):
                name, value = (part.strip() for part in check.split("="))
                field = ExpressionAttributeNames[name]
                if stored.get(field) != ExpressionAttributeValues[value]:
                    raise client_error(
                        "ConditionalCheckFailedException",
                        "The conditional request failed",
                    )

        if position is None:
            self.items.append(copy.deepcopy(Item))
        else:
            self.items[position] = copy.deepcopy(Item)
        return {}


# ----- Fixtures -----

@pytest.fixture
def sample_items():
    """Three items with top-level and nested fields to rename."""
    return [
        {
            "id": S("1"),
            "fullname": S("Ada Lovelace"),
            "profile": M(tel=S("555-0101"), address=M(zip=S("10001"))),
        },
        {
            "id": S("2"),
            "fullname": S("Alan Turing"),
            "profile": M(tel=S("555-0102")),
        },
        {
            "id": S("3"),
            "name": S("Grace Hopper"),
            "visits": N(7),
        },
    ]


@pytest.fixture
def fake_table(sample_items):
    """In-memory table holding the sample items, two per scan page."""
    return FakeTable(sample_items, page_size=2)


@pytest.fixture
def dynamodb_client():
    """Real DynamoDB client with dummy credentials; use with a Stubber."""
    return boto3.client(
        "dynamodb",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def stubber(dynamodb_client):
    """Activated Stubber; asserts every queued response was consumed."""
    with Stubber(dynamodb_client) as stub:
        yield stub
        stub.assert_no_pending_responses()
