"""
DynamoDB tables:

  Rooms         HASH room_id
                GSI StatusIndex: HASH status
  Availability  HASH room_id, RANGE date (YYYY-MM-DD)
                GSI StatusDateIndex: HASH status, RANGE date
  Bookings      HASH booking_id
                GSI StatusIndex: HASH booking_status

Numbers come back from boto3 as Decimal and are turned into int here, so the
rest of the app only ever sees whole currency units.
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal
from functools import wraps

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import BotoCoreError, ClientError

from services.errors import StorageFailure

logger = logging.getLogger(__name__)

CONDITION_FAILED = "ConditionalCheckFailedException"


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _plain(value):
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


def _condition_failed(exc: ClientError) -> bool:
    return exc.response.get("Error", {}).get("Code") == CONDITION_FAILED


def _storage_errors(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except (ClientError, BotoCoreError) as exc:
            logger.exception("DynamoDB %s failed", fn.__name__)
            raise StorageFailure() from exc
    return wrapper


def _scan_all(table, **kwargs):
    resp = table.scan(**kwargs)
    items = resp.get("Items", [])
    while "LastEvaluatedKey" in resp:
        resp = table.scan(ExclusiveStartKey=resp["LastEvaluatedKey"], **kwargs)
        items.extend(resp.get("Items", []))
    return items


def _query_all(table, **kwargs):
    resp = table.query(**kwargs)
    items = resp.get("Items", [])
    while "LastEvaluatedKey" in resp:
        resp = table.query(ExclusiveStartKey=resp["LastEvaluatedKey"], **kwargs)
        items.extend(resp.get("Items", []))
    return items


class DynamoStore:
    name = "dynamodb"

    def __init__(self, rooms_table="AlpineAura-Rooms", availability_table="AlpineAura-Availability",
                 bookings_table="AlpineAura-Bookings", region_name="ap-south-1", endpoint_url=None):
        self._resource = boto3.resource("dynamodb", region_name=region_name, endpoint_url=endpoint_url)
        self.table_names = {
            "rooms": rooms_table,
            "availability": availability_table,
            "bookings": bookings_table,
        }
        self.rooms = self._resource.Table(rooms_table)
        self.availability = self._resource.Table(availability_table)
        self.bookings = self._resource.Table(bookings_table)

    # ---------- Catalog ----------
    @_storage_errors
    def list_rooms(self, status=None):
        kwargs = {}
        if status:
            kwargs["FilterExpression"] = Attr("status").eq(status)
        rooms = [_plain(i) for i in _scan_all(self.rooms, **kwargs)]
        return sorted(rooms, key=lambda r: r["room_id"])

    @_storage_errors
    def get_room(self, room_id):
        resp = self.rooms.get_item(Key={"room_id": room_id})
        item = resp.get("Item")
        return _plain(item) if item else None

    @_storage_errors
    def put_room(self, room):
        timestamp = now_iso()
        item = {"created_at": timestamp, **room, "updated_at": timestamp}
        self.rooms.put_item(Item={k: v for k, v in item.items() if v is not None})

    # ---------- Ledger ----------
    @_storage_errors
    def get_night(self, room_id, night):
        resp = self.availability.get_item(Key={"room_id": room_id, "date": night.isoformat()})
        item = resp.get("Item")
        return _plain(item) if item else None

    @_storage_errors
    def put_night(self, record):
        timestamp = now_iso()
        item = {"created_at": timestamp, **record, "updated_at": timestamp}
        self.availability.put_item(Item={k: v for k, v in item.items() if v is not None})

    @_storage_errors
    def claim_night(self, room_id, night, booking_id):
        timestamp = now_iso()
        try:
            self.availability.update_item(
                Key={"room_id": room_id, "date": night.isoformat()},
                UpdateExpression=(
                    "SET #status = :booked, booking_id = :booking_id, "
                    "updated_at = :now, created_at = if_not_exists(created_at, :now)"
                ),
                ConditionExpression="attribute_not_exists(room_id) OR #status = :available",
                ExpressionAttributeNames={"#status": "status"},
                ExpressionAttributeValues={
                    ":booked": "booked",
                    ":available": "available",
                    ":booking_id": booking_id,
                    ":now": timestamp,
                },
            )
        except ClientError as exc:
            if _condition_failed(exc):
                return False
            raise
        return True

    @_storage_errors
    def release_night(self, room_id, night, booking_id):
        try:
            self.availability.update_item(
                Key={"room_id": room_id, "date": night.isoformat()},
                UpdateExpression="SET #status = :available, updated_at = :now REMOVE booking_id",
                ConditionExpression="booking_id = :booking_id",
                ExpressionAttributeNames={"#status": "status"},
                ExpressionAttributeValues={
                    ":available": "available",
                    ":booking_id": booking_id,
                    ":now": now_iso(),
                },
            )
        except ClientError as exc:
            if _condition_failed(exc):
                return False
            raise
        return True

    @_storage_errors
    def nights_for_booking(self, booking_id):
        items = _scan_all(self.availability, FilterExpression=Attr("booking_id").eq(booking_id))
        return sorted((_plain(i) for i in items), key=lambda r: r["date"])

    @_storage_errors
    def nights_between(self, start, end):
        items = _scan_all(
            self.availability,
            FilterExpression=Attr("date").between(start.isoformat(), end.isoformat()),
        )
        return [_plain(i) for i in items]

    # ---------- Bookings ----------
    @_storage_errors
    def insert_booking(self, booking):
        try:
            self.bookings.put_item(
                Item={k: v for k, v in booking.items() if v is not None},
                ConditionExpression="attribute_not_exists(booking_id)",
            )
        except ClientError as exc:
            if _condition_failed(exc):
                return False
            raise
        return True

    @_storage_errors
    def get_booking(self, booking_id):
        resp = self.bookings.get_item(Key={"booking_id": booking_id})
        item = resp.get("Item")
        return _plain(item) if item else None

    @_storage_errors
    def update_booking(self, booking_id, fields):
        names, values, sets = {}, {}, []
        for i, (field, value) in enumerate(fields.items()):
            names[f"#f{i}"] = field
            values[f":v{i}"] = value
            sets.append(f"#f{i} = :v{i}")
        try:
            resp = self.bookings.update_item(
                Key={"booking_id": booking_id},
                UpdateExpression="SET " + ", ".join(sets),
                ConditionExpression="attribute_exists(booking_id)",
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
                ReturnValues="ALL_NEW",
            )
        except ClientError as exc:
            if _condition_failed(exc):
                return None
            raise
        return _plain(resp.get("Attributes", {}))

    @_storage_errors
    def list_bookings(self, status=None):
        if status:
            items = _query_all(
                self.bookings,
                IndexName="StatusIndex",
                KeyConditionExpression=Key("booking_status").eq(status),
            )
        else:
            items = _scan_all(self.bookings)
        return [_plain(i) for i in items]

    # ---------- Admin ----------
    @_storage_errors
    def create_schema(self):
        specs = {
            "rooms": {
                "KeySchema": [{"AttributeName": "room_id", "KeyType": "HASH"}],
                "AttributeDefinitions": [
                    {"AttributeName": "room_id", "AttributeType": "S"},
                    {"AttributeName": "status", "AttributeType": "S"},
                ],
                "GlobalSecondaryIndexes": [{
                    "IndexName": "StatusIndex",
                    "KeySchema": [{"AttributeName": "status", "KeyType": "HASH"}],
                    "Projection": {"ProjectionType": "ALL"},
                }],
            },
            "availability": {
                "KeySchema": [
                    {"AttributeName": "room_id", "KeyType": "HASH"},
                    {"AttributeName": "date", "KeyType": "RANGE"},
                ],
                "AttributeDefinitions": [
                    {"AttributeName": "room_id", "AttributeType": "S"},
                    {"AttributeName": "date", "AttributeType": "S"},
                    {"AttributeName": "status", "AttributeType": "S"},
                ],
                "GlobalSecondaryIndexes": [{
                    "IndexName": "StatusDateIndex",
                    "KeySchema": [
                        {"AttributeName": "status", "KeyType": "HASH"},
                        {"AttributeName": "date", "KeyType": "RANGE"},
                    ],
                    "Projection": {"ProjectionType": "ALL"},
                }],
            },
            "bookings": {
                "KeySchema": [{"AttributeName": "booking_id", "KeyType": "HASH"}],
                "AttributeDefinitions": [
                    {"AttributeName": "booking_id", "AttributeType": "S"},
                    {"AttributeName": "booking_status", "AttributeType": "S"},
                ],
                "GlobalSecondaryIndexes": [{
                    "IndexName": "StatusIndex",
                    "KeySchema": [{"AttributeName": "booking_status", "KeyType": "HASH"}],
                    "Projection": {"ProjectionType": "ALL"},
                }],
            },
        }
        created = []
        for key, spec in specs.items():
            table_name = self.table_names[key]
            try:
                table = self._resource.create_table(TableName=table_name, BillingMode="PAY_PER_REQUEST", **spec)
            except ClientError as exc:
                if exc.response.get("Error", {}).get("Code") == "ResourceInUseException":
                    logger.info("Table %s already exists", table_name)
                    continue
                raise
            table.wait_until_exists()
            created.append(table_name)
        return created

    @_storage_errors
    def ping(self):
        self._resource.meta.client.list_tables(Limit=1)
        return {"backend": self.name, "tables": list(self.table_names.values())}
