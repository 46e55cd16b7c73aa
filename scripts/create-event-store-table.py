#!/usr/bin/env python3
"""
Event Store テーブル作成スクリプト

aggregateId (HASH) / aggregateVersion (RANGE) をキーとする
DynamoDB テーブルを作成する。既に存在する場合は何もしない。

Usage:
    uv run python scripts/create-event-store-table.py --table events-development
    uv run python scripts/create-event-store-table.py --table accounts --key-type N \
        --endpoint-url http://localhost:8000
"""

import argparse
import json
import sys

import boto3
from botocore.exceptions import ClientError


def create_event_store_table(
    table_name: str,
    region: str = "ap-northeast-1",
    key_type: str = "S",
    endpoint_url: str | None = None,
) -> dict:
    """Event Store テーブルを作成"""
    client = boto3.client("dynamodb", region_name=region, endpoint_url=endpoint_url)

    # 既存チェック
    try:
        response = client.describe_table(TableName=table_name)
        print(f"Table already exists: {table_name}")
        return response["Table"]
    except ClientError as e:
        if e.response["Error"]["Code"] != "ResourceNotFoundException":
            raise

    # 作成
    print(f"Creating table: {table_name} (aggregateId type: {key_type})")
    response = client.create_table(
        TableName=table_name,
        AttributeDefinitions=[
            {"AttributeName": "aggregateId", "AttributeType": key_type},
            {"AttributeName": "aggregateVersion", "AttributeType": "N"},
        ],
        KeySchema=[
            {"AttributeName": "aggregateId", "KeyType": "HASH"},
            {"AttributeName": "aggregateVersion", "KeyType": "RANGE"},
        ],
        BillingMode="PAY_PER_REQUEST",
    )

    # ステータス待機
    print("Waiting for ACTIVE status...")
    client.get_waiter("table_exists").wait(TableName=table_name)
    print(f"Created: {table_name}")
    return response["TableDescription"]


def main():
    parser = argparse.ArgumentParser(description="Create Event Store DynamoDB table")
    parser.add_argument(
        "--table",
        required=True,
        help="Table name",
    )
    parser.add_argument(
        "--region",
        default="ap-northeast-1",
        help="AWS region (default: ap-northeast-1)",
    )
    parser.add_argument(
        "--key-type",
        choices=["S", "N", "B"],
        default="S",
        help="DynamoDB attribute type of aggregateId (default: S)",
    )
    parser.add_argument(
        "--endpoint-url",
        default=None,
        help="Custom endpoint, e.g. DynamoDB Local",
    )
    args = parser.parse_args()

    try:
        table = create_event_store_table(
            args.table,
            args.region,
            args.key_type,
            args.endpoint_url,
        )

        print()
        print("=== Summary ===")
        print(json.dumps(table, indent=2, default=str))

    except ClientError as e:
        print(f"AWS Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
